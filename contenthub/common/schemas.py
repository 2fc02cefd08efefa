from pydantic import BaseModel

class RequestModel(BaseModel):
    # Unknown fields are a 400, not silently dropped
    class Config:
        extra = "forbid"
        use_enum_values = True

class ORMModel(BaseModel):
    class Config:
        from_attributes = True

class MessageResponse(BaseModel):
    detail: str
