"""
Shared base for domain models

JSON field names are camelCase (productId, batchId, ...) to match the
web client; Python attributes stay snake_case.
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict:
        """
        Convert to a JSON-ready dictionary with camelCase keys

        Decimal becomes float and datetime becomes an ISO-8601 string so the
        result can go straight into a JSON response or a WebSocket frame.
        """
        data = self.model_dump(by_alias=True, mode="python")
        for key, value in data.items():
            if isinstance(value, Decimal):
                data[key] = float(value)
            elif isinstance(value, datetime):
                data[key] = value.isoformat()
            elif isinstance(value, Enum):
                data[key] = value.value
        return data
