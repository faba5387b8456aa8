import logfire

from dapd1.domain.catalog.command.add import DatasetVersioned
from dapd1.domain.catalog.model.pid import canonical_locator
from dapd1.domain.catalog.service.version_chain import VersionChainService
from dapd1.domain.shared.command import Command, CommandHandler


class UpdateDataset(Command):
    """New version of a dataset.

    Without ``obsoletes`` the dataset keeps its URL. With it, ``base_url`` is
    a new URL that takes over from the registered ``obsoletes`` URL.
    """

    base_url: str
    obsoletes: str | None = None


class UpdateDatasetHandler(CommandHandler[UpdateDataset, DatasetVersioned]):
    version_chain: VersionChainService

    def run(self, cmd: UpdateDataset) -> DatasetVersioned:
        with logfire.span("UpdateDataset", base_url=cmd.base_url, obsoletes=cmd.obsoletes):
            if cmd.obsoletes is None:
                pointer = self.version_chain.update_in_place(cmd.base_url)
                previous = pointer.base_url
            else:
                pointer = self.version_chain.replace(cmd.base_url, cmd.obsoletes)
                previous = canonical_locator(cmd.obsoletes)
            logfire.info("Dataset updated", base_url=cmd.base_url, sdo_id=pointer.sdo_id)

        return DatasetVersioned(**pointer.model_dump(), obsoletes=previous)
