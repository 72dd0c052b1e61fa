"""Host models for the Mackerel hosts API."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..core.utils import omit_empty


class HostStatus(Enum):
    """Host statuses known to Mackerel"""
    WORKING = "working"
    STANDBY = "standby"
    MAINTENANCE = "maintenance"
    POWEROFF = "poweroff"
    RETIRED = "retired"


# Statuses searched when looking a host up by its custom identifier
ACTIVE_STATUSES = [
    HostStatus.WORKING.value,
    HostStatus.STANDBY.value,
    HostStatus.MAINTENANCE.value,
    HostStatus.POWEROFF.value,
]


def _fold(data: Dict[str, Any]) -> Dict[str, Any]:
    # JSON keys are matched case-insensitively
    return {str(key).lower(): value for key, value in data.items()}


@dataclass
class Interface:
    name: str
    ip_address: str = ""
    mac_address: str = ""
    ipv4_addresses: List[str] = field(default_factory=list)
    ipv6_addresses: List[str] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "name": self.name,
            "ipAddress": self.ip_address,
            "macAddress": self.mac_address,
            "ipv4Addresses": list(self.ipv4_addresses),
            "ipv6Addresses": list(self.ipv6_addresses),
        }
        return omit_empty(payload, "ipAddress", "macAddress", "ipv4Addresses", "ipv6Addresses")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Interface":
        folded = _fold(data)
        return cls(
            name=folded.get("name") or "",
            ip_address=folded.get("ipaddress") or "",
            mac_address=folded.get("macaddress") or "",
            ipv4_addresses=list(folded.get("ipv4addresses") or []),
            ipv6_addresses=list(folded.get("ipv6addresses") or []),
        )


@dataclass
class HostMeta:
    """Agent and inventory metadata attached to a host"""
    agent_name: str = ""
    agent_version: str = ""
    agent_revision: str = ""
    block_device: Optional[Any] = None
    cpu: Optional[Any] = None
    filesystem: Optional[Any] = None
    kernel: Optional[Any] = None
    memory: Optional[Any] = None
    cloud: Optional[Any] = None

    _KEYS = (
        ("agent_name", "agent-name"),
        ("agent_version", "agent-version"),
        ("agent_revision", "agent-revision"),
        ("block_device", "block_device"),
        ("cpu", "cpu"),
        ("filesystem", "filesystem"),
        ("kernel", "kernel"),
        ("memory", "memory"),
        ("cloud", "cloud"),
    )

    def to_payload(self) -> Dict[str, Any]:
        payload = {key: getattr(self, attr) for attr, key in self._KEYS}
        return omit_empty(payload, *(key for _, key in self._KEYS))

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "HostMeta":
        folded = _fold(data or {})
        values = {attr: folded.get(key) for attr, key in cls._KEYS}
        for attr in ("agent_name", "agent_version", "agent_revision"):
            values[attr] = values[attr] or ""
        return cls(**values)


@dataclass
class CheckConfig:
    name: str
    memo: str = ""

    def to_payload(self) -> Dict[str, Any]:
        return omit_empty({"name": self.name, "memo": self.memo}, "memo")


@dataclass
class Host:
    """A host registered on Mackerel"""
    id: str
    name: str = ""
    display_name: str = ""
    custom_identifier: str = ""
    type: str = ""
    status: str = ""
    memo: str = ""
    roles: Dict[str, List[str]] = field(default_factory=dict)
    role_fullnames: List[str] = field(default_factory=list)
    interfaces: List[Interface] = field(default_factory=list)
    meta: HostMeta = field(default_factory=HostMeta)
    is_retired: bool = False
    created_at: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Host":
        folded = _fold(data)
        roles = folded.get("roles") or {}
        return cls(
            id=folded.get("id") or "",
            name=folded.get("name") or "",
            display_name=folded.get("displayname") or "",
            custom_identifier=folded.get("customidentifier") or "",
            type=folded.get("type") or "",
            status=folded.get("status") or "",
            memo=folded.get("memo") or "",
            roles={str(service): list(names or []) for service, names in roles.items()},
            role_fullnames=list(folded.get("rolefullnames") or []),
            interfaces=[Interface.from_dict(item) for item in folded.get("interfaces") or []],
            meta=HostMeta.from_dict(folded.get("meta")),
            is_retired=bool(folded.get("isretired", False)),
            created_at=int(folded.get("createdat") or 0),
        )

    def host_status(self) -> Optional[HostStatus]:
        """Return the status as a HostStatus, or None if it is unknown"""
        try:
            return HostStatus(self.status)
        except ValueError:
            return None


@dataclass
class CreateHostParam:
    """Parameters for registering or updating a host"""
    name: str
    display_name: str = ""
    custom_identifier: str = ""
    meta: HostMeta = field(default_factory=HostMeta)
    interfaces: List[Interface] = field(default_factory=list)
    role_fullnames: List[str] = field(default_factory=list)
    checks: List[CheckConfig] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "name": self.name,
            "displayName": self.display_name,
            "customIdentifier": self.custom_identifier,
            "meta": self.meta.to_payload() if self.meta else {},
            "interfaces": [iface.to_payload() for iface in self.interfaces or []],
            "roleFullnames": list(self.role_fullnames or []),
            "checks": [check.to_payload() for check in self.checks or []],
        }
        return omit_empty(payload, "displayName", "customIdentifier")


class UpdateHostParam(CreateHostParam):
    """Parameters for updating a host; same shape as CreateHostParam"""
    pass


@dataclass
class FindHostsParam:
    service: str = ""
    roles: List[str] = field(default_factory=list)
    name: str = ""
    custom_identifier: str = ""
    statuses: List[str] = field(default_factory=list)

    def to_query(self) -> List[tuple]:
        """Render as (key, value) pairs; repeated keys for list fields"""
        query: List[tuple] = []
        if self.service:
            query.append(("service", self.service))
        for role in self.roles:
            query.append(("role", role))
        if self.name:
            query.append(("name", self.name))
        if self.custom_identifier:
            query.append(("customIdentifier", self.custom_identifier))
        for status in self.statuses:
            query.append(("status", status.value if isinstance(status, HostStatus) else status))
        return query
