import logfire

from dapd1.domain.catalog.service.version_chain import VersionChainService
from dapd1.domain.shared.command import Command, CommandHandler, Result


class AddDataset(Command):
    base_url: str


class DatasetVersioned(Result):
    base_url: str
    sdo_id: str
    smo_id: str
    ore_id: str
    obsoletes: str | None = None  # base URL whose PIDs were superseded


class AddDatasetHandler(CommandHandler[AddDataset, DatasetVersioned]):
    version_chain: VersionChainService

    def run(self, cmd: AddDataset) -> DatasetVersioned:
        with logfire.span("AddDataset", base_url=cmd.base_url):
            pointer = self.version_chain.add_new(cmd.base_url)
            logfire.info("Dataset added", base_url=cmd.base_url, sdo_id=pointer.sdo_id)

        return DatasetVersioned(**pointer.model_dump())
