from typing import Annotated, Optional

from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from app.utils.mongo import new_id, utcnow

# ObjectIds are kept as strings on the Python side
PyObjectId = Annotated[str, BeforeValidator(str)]


class MongoBaseModel(BaseModel):
    """Top-level document; `_id` is assigned by MongoDB unless given."""
    id: Optional[PyObjectId] = Field(default=None, alias="_id")

    model_config = ConfigDict(populate_by_name=True)

    def to_mongo(self) -> dict:
        data = self.model_dump(exclude={"id"})
        if self.id:
            data["_id"] = ObjectId(self.id)
        return data


class EmbeddedModel(BaseModel):
    """Entry stored inside a parent document's array, addressed by its own `id`."""
    id: str = Field(default_factory=new_id)

    def to_mongo(self) -> dict:
        return self.model_dump()
