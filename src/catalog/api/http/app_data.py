from dataclasses import dataclass

from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.core.services.file_store import FileStoreService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    file_store: FileStoreService
