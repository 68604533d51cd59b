"""Pydantic models for Railway API payloads and provisioning results."""

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class RailwayModel(BaseModel):
    """Base model mapping camelCase API keys onto snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


# ===== TEMPLATE CATALOG =====


class ServiceSource(RailwayModel):
    image: Optional[str] = None
    repo: Optional[str] = None


class TemplateVariable(RailwayModel):
    default_value: Optional[str] = None
    description: Optional[str] = None
    is_optional: Optional[bool] = None

    @field_validator("default_value", mode="before")
    @classmethod
    def scalar_as_string(cls, v):
        if isinstance(v, (int, float, bool)):
            return str(v).lower() if isinstance(v, bool) else str(v)
        return v


class TcpProxyDeclaration(RailwayModel):
    port: Optional[int] = None


class Networking(RailwayModel):
    tcp_proxies: Dict[str, TcpProxyDeclaration] = Field(default_factory=dict)
    service_domains: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    @field_validator("tcp_proxies", "service_domains", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or {}


class VolumeMountDeclaration(RailwayModel):
    mount_path: Optional[str] = None


class ServiceConfig(RailwayModel):
    """One service slot of a template's serialized config."""

    name: Optional[str] = None
    icon: Optional[str] = None
    source: Optional[ServiceSource] = None
    variables: Dict[str, TemplateVariable] = Field(default_factory=dict)
    networking: Optional[Networking] = None
    volume_mounts: Dict[str, VolumeMountDeclaration] = Field(default_factory=dict)

    @field_validator("variables", "volume_mounts", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or {}

    @property
    def image(self) -> Optional[str]:
        return self.source.image if self.source else None

    @property
    def tcp_proxies(self) -> Dict[str, TcpProxyDeclaration]:
        return self.networking.tcp_proxies if self.networking else {}


class SerializedTemplateConfig(RailwayModel):
    services: Dict[str, ServiceConfig] = Field(default_factory=dict)

    @field_validator("services", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or {}


class Template(RailwayModel):
    """A catalog template, validated right after it is fetched."""

    id: str
    name: str = ""
    description: str = ""
    category: str = ""
    projects: int = 0
    serialized_config: SerializedTemplateConfig = Field(
        default_factory=SerializedTemplateConfig
    )

    @field_validator("serialized_config", mode="before")
    @classmethod
    def decode_serialized_config(cls, v):
        """The API returns serializedConfig as a JSON scalar, sometimes encoded."""
        if v is None:
            return {}
        if isinstance(v, str):
            return json.loads(v)
        return v

    @field_validator("name", "category", "description", mode="before")
    @classmethod
    def none_as_blank(cls, v):
        return v or ""

    @field_validator("projects", mode="before")
    @classmethod
    def none_as_zero(cls, v):
        return v or 0


# ===== REMOTE ENTITIES =====


class Service(RailwayModel):
    id: str
    name: str
    project_id: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    deleted_at: Optional[str] = None
    icon: Optional[str] = None
    template_service_id: Optional[str] = None


class ServiceInstance(RailwayModel):
    id: str
    service_id: str
    service_name: Optional[str] = None
    environment_id: str
    region: Optional[str] = None
    num_replicas: Optional[int] = None
    build_command: Optional[str] = None
    start_command: Optional[str] = None
    root_directory: Optional[str] = None
    healthcheck_path: Optional[str] = None
    sleep_application: Optional[bool] = None


class VariableUpsertInput(RailwayModel):
    project_id: str
    environment_id: str
    service_id: Optional[str] = None
    name: str
    value: str


class TcpProxy(RailwayModel):
    id: str
    application_port: int
    proxy_port: Optional[int] = None
    domain: Optional[str] = None
    environment_id: Optional[str] = None
    service_id: Optional[str] = None


class Volume(RailwayModel):
    id: str
    name: Optional[str] = None
    project_id: Optional[str] = None
    created_at: Optional[str] = None


class MutationResult(BaseModel):
    """Outcome of a mutation whose only success signal is a boolean."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    reason: Optional[str] = None

    @classmethod
    def succeeded(cls) -> "MutationResult":
        return cls(ok=True)

    @classmethod
    def failed(cls, reason: str) -> "MutationResult":
        return cls(ok=False, reason=reason)


# ===== PROVISIONING =====


class ResolvedService(BaseModel):
    """The single service slot a provisioning run will create."""

    model_config = ConfigDict(frozen=True)

    source_id: str
    slot: str
    image: str
    default_name: str
    variables: Dict[str, str] = Field(default_factory=dict)
    application_port: Optional[int] = None
    mount_path: str


class ProvisioningPlan(BaseModel):
    """Resolved service plus the caller's placement; lives for one run."""

    model_config = ConfigDict(frozen=True)

    project_id: str
    environment_id: str
    region: str
    service: ResolvedService
    name: Optional[str] = None

    @property
    def service_name(self) -> str:
        return self.name or self.service.default_name


class ProvisionedResourceSet(BaseModel):
    """Everything a successful provisioning run created."""

    service: Service
    environment_id: str
    region: str
    variables: List[str] = Field(default_factory=list)
    tcp_proxy: Optional[TcpProxy] = None
    volume: Optional[Volume] = None
    summary: str = ""
