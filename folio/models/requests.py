from pydantic import BaseModel, Field


class CommandRequest(BaseModel):
    line: str = Field(..., max_length=500, description="Command line as typed, e.g. 'search python'")
