"""
Data Models

Input records supplied by the build orchestrator are validated with
pydantic. Compile products (groups and the routing document) are plain
classes that only live for the duration of one build.
"""

import json
import re
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

ConfigInput = Union["DeployConfig", Mapping[str, Any], None]


class IsrConfig(BaseModel):
    """Incremental static regeneration settings for a route."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra='ignore')

    expiration: Optional[Union[bool, int, float]] = None
    group: Optional[int] = None
    bypass_token: Optional[str] = Field(default=None, alias='bypassToken')
    allow_query: Optional[List[str]] = Field(default=None, alias='allowQuery')


class DeployConfig(BaseModel):
    """
    Per-route deployment configuration.

    Every field is optional. Missing fields are filled from the adapter
    defaults, and whatever is still missing after that is left unset.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra='ignore')

    runtime: Optional[str] = None
    external: Optional[List[str]] = None
    regions: Optional[Union[List[str], str]] = None
    memory: Optional[int] = None
    max_duration: Optional[int] = Field(default=None, alias='maxDuration')
    isr: Optional[IsrConfig] = None

    @classmethod
    def coerce(cls, value: ConfigInput) -> "DeployConfig":
        """Build a DeployConfig from a model, a mapping or None."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        return cls.model_validate(dict(value))

    def merged(self, *overrides: ConfigInput) -> "DeployConfig":
        """
        Return a copy with each override applied in turn.

        Later sources win field by field; unset fields never shadow a value.
        ``isr`` is replaced as a whole.
        """
        values = self.model_dump(exclude_none=True)
        for override in overrides:
            values.update(DeployConfig.coerce(override).model_dump(exclude_none=True))
        return DeployConfig.model_validate(values)


class RouteDefinition(BaseModel):
    """One framework-discovered endpoint."""

    model_config = ConfigDict(frozen=True, extra='ignore')

    id: str
    pattern: str
    prerender: bool = False
    config: Optional[DeployConfig] = None

    @field_validator('pattern', mode='before')
    @classmethod
    def _pattern_source(cls, value: Any) -> Any:
        # Compiled patterns are keyed by their source text
        if isinstance(value, re.Pattern):
            return value.pattern
        return value


class PrerenderedPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    file: str


class PrerenderedRedirect(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    location: str
    status: int = 308


class Group:
    """
    Routes that share one config fingerprint and deploy as one function.

    Attributes:
        index: Sequential id in first-seen order (0-based)
        config: The representative config of the group
        fingerprint: The fingerprint every member resolves to
        routes: Members in input order
    """

    def __init__(self, index: int, config: DeployConfig, fingerprint: str, prefix: str = 'fn-'):
        self.index = index
        self.config = config
        self.fingerprint = fingerprint
        self.prefix = prefix
        self.routes: List[RouteDefinition] = []

    @property
    def name(self) -> str:
        return f"{self.prefix}{self.index}"

    @property
    def external(self) -> List[str]:
        return list(self.config.external or [])

    def __repr__(self) -> str:
        return f"Group(name={self.name!r}, routes={[route.id for route in self.routes]!r})"


class RoutingDocument:
    """The routing/config document consumed by the hosting platform."""

    def __init__(
        self,
        version: int,
        routes: Optional[List[Dict[str, Any]]] = None,
        overrides: Optional[Dict[str, Dict[str, str]]] = None
    ):
        self.version = version
        self.routes = routes if routes is not None else []
        self.overrides = overrides if overrides is not None else {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'version': self.version,
            'routes': self.routes,
            'overrides': self.overrides,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent='\t')
