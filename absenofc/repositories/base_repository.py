"""
Base Repository - read access to a backend collection
"""
import logging
from typing import Any, Dict, Generic, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from absenofc.core.backend import BackendClient

logger = logging.getLogger(__name__)

SchemaType = TypeVar("SchemaType", bound=BaseModel)


class BaseBackendRepository(Generic[SchemaType]):
    def __init__(self, schema: Type[SchemaType], path: str):
        self.schema = schema
        self.path = path

    def get_raw(self, client: BackendClient) -> List[Dict[str, Any]]:
        """Get the collection as plain dicts"""
        return client.get_collection(self.path)

    def get_all(self, client: BackendClient) -> List[SchemaType]:
        """Get the collection validated against the schema, skipping malformed records"""
        records = []
        for raw in self.get_raw(client):
            try:
                records.append(self.schema.model_validate(raw))
            except ValidationError as e:
                logger.debug("Skipping malformed %s record: %s", self.schema.__name__, e.error_count())
        return records
