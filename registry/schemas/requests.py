"""Request body schemas for API endpoints."""

from typing import Any, Literal

from pydantic import AnyHttpUrl, BaseModel, Field, field_validator

SourceType = Literal["github", "manual", "discovered"]
UsageAction = Literal["view", "download", "install", "call"]


def _check_input_schema(v: dict[str, Any] | None) -> dict[str, Any] | None:
    if v is not None and "type" in v and v["type"] != "object":
        raise ValueError("input_schema.type must be 'object'")
    return v


class CreateToolRequest(BaseModel):
    """Request to create a tool. Score fields are computed server-side from the quality flags."""

    name: str = Field(..., min_length=1, max_length=100, description="Unique tool name")
    description: str = Field(..., min_length=1, max_length=1000)
    category: str = Field(..., min_length=1, max_length=50, description="Category slug")
    version: str = Field(default="1.0.0", max_length=50)

    source_type: SourceType = "manual"
    source_url: AnyHttpUrl | None = None
    mcp_server_url: AnyHttpUrl | None = None
    repository_url: AnyHttpUrl | None = None

    input_schema: dict[str, Any] = Field(..., description="JSON schema of the tool input (type: object)")
    output_schema: dict[str, Any] | None = None

    tags: list[str] = Field(default_factory=list)
    chains: list[str] = Field(default_factory=list, description="e.g. ethereum, bsc, solana")
    protocols: list[str] = Field(default_factory=list, description="e.g. uniswap, aave")
    requires_api_key: bool = False
    api_key_name: str | None = Field(None, max_length=100, description="e.g. COINGECKO_API_KEY")

    is_validated: bool = False
    is_claimed: bool = False
    has_tools: bool = True
    has_readme: bool = False
    has_license: bool = False
    has_deployment: bool = False
    has_deploy_more_than_manual: bool = False
    has_prompts: bool = False
    has_resources: bool = False

    @field_validator("name", "description", "category")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("input_schema")
    @classmethod
    def object_schema(cls, v: dict[str, Any]) -> dict[str, Any]:
        return _check_input_schema(v)


class UpdateToolRequest(BaseModel):
    """Partial update. Omitted or null flags keep their stored value; any flag present triggers a rescore."""

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, min_length=1, max_length=1000)
    category: str | None = Field(None, min_length=1, max_length=50)
    version: str | None = Field(None, max_length=50)

    source_type: SourceType | None = None
    source_url: AnyHttpUrl | None = None
    mcp_server_url: AnyHttpUrl | None = None
    repository_url: AnyHttpUrl | None = None

    input_schema: dict[str, Any] | None = None
    output_schema: dict[str, Any] | None = None

    tags: list[str] | None = None
    chains: list[str] | None = None
    protocols: list[str] | None = None
    requires_api_key: bool | None = None
    api_key_name: str | None = Field(None, max_length=100)

    is_validated: bool | None = None
    is_claimed: bool | None = None
    has_tools: bool | None = None
    has_readme: bool | None = None
    has_license: bool | None = None
    has_deployment: bool | None = None
    has_deploy_more_than_manual: bool | None = None
    has_prompts: bool | None = None
    has_resources: bool | None = None

    @field_validator("name", "description", "category")
    @classmethod
    def strip_required(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("input_schema")
    @classmethod
    def object_schema(cls, v: dict[str, Any] | None) -> dict[str, Any] | None:
        return _check_input_schema(v)

    def changes(self) -> dict[str, Any]:
        """Fields the client sent, with URLs as plain strings."""
        data = self.model_dump(exclude_unset=True)
        for key in ("source_url", "mcp_server_url", "repository_url"):
            if data.get(key) is not None:
                data[key] = str(data[key])
        return data


class RecordUsageRequest(BaseModel):
    action: UsageAction = Field(default="call", description="One of: view, download, install, call")
    metadata: dict[str, Any] | None = None


class CreateCategoryRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    slug: str = Field(..., min_length=1, max_length=50)
    description: str | None = Field(None, max_length=500)
    icon: str | None = Field(None, max_length=100)


class SubmitDiscoveryRequest(BaseModel):
    """Submit a tool source for review."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=1000)
    source_url: AnyHttpUrl
    source_type: SourceType = "discovered"
    raw_data: dict[str, Any] | None = None
    security_score: int | None = Field(None, ge=0, le=100)
    quality_score: int | None = Field(None, ge=0, le=100)
