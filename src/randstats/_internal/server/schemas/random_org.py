"""random.org JSON-RPC messages. See https://api.random.org/json-rpc/4/basic"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class GenerateIntegersParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    api_key: str = Field(alias="apiKey")
    n: int
    min: int
    max: int


class GenerateIntegersRequest(BaseModel):
    jsonrpc: Literal["2.0"] = "2.0"
    method: Literal["generateIntegers"] = "generateIntegers"
    params: GenerateIntegersParams
    id: int


class RandomData(BaseModel):
    data: List[int]
    completion_time: Optional[str] = Field(default=None, alias="completionTime")


class GenerateIntegersResult(BaseModel):
    random: RandomData
    bits_used: Optional[int] = Field(default=None, alias="bitsUsed")
    bits_left: Optional[int] = Field(default=None, alias="bitsLeft")
    requests_left: Optional[int] = Field(default=None, alias="requestsLeft")
    advisory_delay: int = Field(default=0, alias="advisoryDelay")  # milliseconds


class RPCError(BaseModel):
    code: Optional[int] = None
    message: str


class GenerateIntegersResponse(BaseModel):
    jsonrpc: Optional[str] = None
    result: Optional[GenerateIntegersResult] = None
    error: Optional[RPCError] = None
    id: Optional[int] = None
