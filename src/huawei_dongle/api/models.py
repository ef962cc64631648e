"""
Huawei Dongle Client - Endpoint Records

Pydantic models for the ``<response>`` documents returned by the device and
for the ``<request>`` documents sent to it. Field names follow Python
conventions; aliases carry the device's XML tags.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..core.exceptions import ConfigurationError, ResponseParseError
from ..core.payload import (
    build_request,
    element_fields,
    parse_response_element,
    parse_response_fields,
)
from ..shared.constants import (
    DEFAULT_LTE_BAND,
    DEFAULT_NETWORK_BAND,
    LOGIN_STATE_LOGGED_IN,
    LOGIN_STATE_NOT_LOGGED_IN,
    SMS_BOX_LOCAL_DRAFT,
    SMS_BOX_LOCAL_INBOX,
    SMS_BOX_LOCAL_OUTBOX,
    SMS_BOX_SIM_DRAFT,
    SMS_BOX_SIM_INBOX,
    SMS_BOX_SIM_OUTBOX,
    SMS_MAX_READ_COUNT,
    SMS_SORT_BY_NAME,
    SMS_SORT_BY_TIME,
)

CONNECTION_STATUS_TEXT = {
    "900": "CONNECTING",
    "901": "CONNECTED",
    "902": "DISCONNECTED",
    "903": "DISCONNECTING",
    "904": "CONNECT_FAILED",
    "905": "CONNECT_STATUS_NULL",
    "906": "CONNECT_STATUS_ERROR",
}

NETWORK_TYPE_TEXT = {
    "7": "HSPA (3G)",
    "19": "LTE (4G)",
    "41": "LTE CA (4G+)",
    "101": "5G NSA",
    "102": "5G SA",
}

SIGNAL_PERCENTAGE = {0: 0, 1: 20, 2: 40, 3: 60, 4: 80, 5: 100}


class DeviceRecord(BaseModel):
    """Base for records parsed from ``<response>`` documents."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def from_xml(cls, text: str):
        """Parse a response body into the record.

        Raises:
            ResponseParseError: If the body is malformed or misses required fields
        """
        fields = parse_response_fields(text)
        try:
            return cls.model_validate(fields)
        except ValidationError as e:
            raise ResponseParseError(
                f"Failed to parse {cls.__name__}: {e}", response_text=text
            )


def _int_or_default(value, default: int = 0) -> int:
    if value in (None, ""):
        return default
    return int(value)


class LoginState(DeviceRecord):
    """Login state from ``/api/user/state-login``."""

    state: int = Field(default=LOGIN_STATE_NOT_LOGGED_IN, alias="State")
    password_type: str = Field(default="4", alias="password_type")
    lock_status: int = Field(default=0, alias="lockstatus")
    remain_wait_time: int = Field(default=0, alias="remainwaittime")
    username: str = Field(default="", alias="username")
    extern_password_type: str = Field(default="", alias="extern_password_type")
    first_login: str = Field(default="", alias="firstlogin")
    user_level: str = Field(default="", alias="userlevel")

    @field_validator("state", mode="before")
    @classmethod
    def parse_state(cls, v):
        return _int_or_default(v, LOGIN_STATE_NOT_LOGGED_IN)

    @field_validator("lock_status", "remain_wait_time", mode="before")
    @classmethod
    def parse_counters(cls, v):
        return _int_or_default(v)

    @property
    def is_logged_in(self) -> bool:
        return self.state == LOGIN_STATE_LOGGED_IN

    @property
    def is_locked(self) -> bool:
        return self.lock_status > 0


class DeviceInformation(DeviceRecord):
    """Device information from ``/api/device/information``."""

    device_name: str = Field(alias="DeviceName")
    serial_number: str = Field(default="", alias="SerialNumber")
    imei: str = Field(default="", alias="Imei")
    imsi: str = Field(default="", alias="Imsi")
    iccid: str = Field(default="", alias="Iccid")
    msisdn: str = Field(default="", alias="Msisdn")
    hardware_version: str = Field(default="", alias="HardwareVersion")
    software_version: str = Field(default="", alias="SoftwareVersion")
    webui_version: str = Field(default="", alias="WebUIVersion")
    mac_address1: str = Field(default="", alias="MacAddress1")
    mac_address2: str = Field(default="", alias="MacAddress2")
    product_family: str = Field(default="", alias="ProductFamily")
    classify: str = Field(default="", alias="Classify")
    work_mode: str = Field(default="", alias="workmode")


class MonitoringStatus(DeviceRecord):
    """Connection and signal status from ``/api/monitoring/status``."""

    connection_status: str = Field(alias="ConnectionStatus")
    current_network_type: str = Field(default="", alias="CurrentNetworkType")
    current_network_type_ex: str = Field(default="", alias="CurrentNetworkTypeEx")
    signal_icon: Optional[str] = Field(default=None, alias="SignalIcon")
    max_signal: Optional[str] = Field(default=None, alias="maxsignal")
    service_status: str = Field(default="", alias="ServiceStatus")
    sim_status: str = Field(default="", alias="SimStatus")
    roaming_status: str = Field(default="", alias="RoamingStatus")
    wifi_status: str = Field(default="", alias="WifiStatus")
    primary_dns: str = Field(default="", alias="PrimaryDns")
    secondary_dns: str = Field(default="", alias="SecondaryDns")
    current_wifi_user: str = Field(default="", alias="CurrentWifiUser")

    @property
    def is_connected(self) -> bool:
        return self.connection_status == "901"

    @property
    def connection_status_text(self) -> str:
        return CONNECTION_STATUS_TEXT.get(self.connection_status, f"UNKNOWN ({self.connection_status})")

    @property
    def network_type_text(self) -> str:
        return NETWORK_TYPE_TEXT.get(
            self.current_network_type, f"Unknown ({self.current_network_type or 'N/A'})"
        )

    @property
    def signal_level(self) -> Optional[int]:
        """Signal strength level (0-5), if reported."""
        try:
            return int(self.signal_icon)
        except (TypeError, ValueError):
            return None

    @property
    def signal_percentage(self) -> Optional[int]:
        level = self.signal_level
        if level is None:
            return None
        return SIGNAL_PERCENTAGE.get(level, 0)

    @property
    def is_sim_ready(self) -> bool:
        return self.sim_status == "1"

    @property
    def is_roaming(self) -> bool:
        return self.roaming_status == "1"

    @property
    def is_service_available(self) -> bool:
        return self.service_status == "2"


# ========== Network ==========

NETWORK_MODE_TEXT = {
    "00": "Auto (2G/3G/4G)",
    "01": "2G Only (GSM/EDGE)",
    "02": "3G Only (UMTS/HSPA)",
    "03": "4G Only (LTE)",
    "0201": "3G Preferred, 2G Fallback",
    "0301": "4G Preferred, 2G Fallback",
    "0302": "4G Preferred, 3G Fallback",
}

NETWORK_MODE_AUTO = "00"
NETWORK_MODE_4G_ONLY = "03"
NETWORK_MODE_4G_PREFERRED = "0302"


class NetworkMode(DeviceRecord):
    """Network mode and band masks from ``/api/net/net-mode``."""

    network_mode: str = Field(alias="NetworkMode")
    network_band: str = Field(default=DEFAULT_NETWORK_BAND, alias="NetworkBand")
    lte_band: str = Field(default=DEFAULT_LTE_BAND, alias="LTEBand")

    @classmethod
    def for_mode(
        cls,
        mode: str,
        network_band: str = DEFAULT_NETWORK_BAND,
        lte_band: str = DEFAULT_LTE_BAND,
    ) -> "NetworkMode":
        """Build a mode setting to send to the device.

        Raises:
            ConfigurationError: If ``mode`` is not a known mode code
        """
        if mode not in NETWORK_MODE_TEXT:
            raise ConfigurationError(
                f"Invalid network mode: {mode}. Valid modes: {', '.join(NETWORK_MODE_TEXT)}"
            )
        return cls(network_mode=mode, network_band=network_band, lte_band=lte_band)

    @classmethod
    def lte_only(cls) -> "NetworkMode":
        return cls.for_mode(NETWORK_MODE_4G_ONLY)

    @classmethod
    def lte_preferred(cls) -> "NetworkMode":
        return cls.for_mode(NETWORK_MODE_4G_PREFERRED)

    @classmethod
    def auto(cls) -> "NetworkMode":
        return cls.for_mode(NETWORK_MODE_AUTO)

    @property
    def mode_text(self) -> str:
        return NETWORK_MODE_TEXT.get(self.network_mode, f"Unknown ({self.network_mode})")

    @property
    def is_4g_only(self) -> bool:
        return self.network_mode == NETWORK_MODE_4G_ONLY

    @property
    def is_auto(self) -> bool:
        return self.network_mode == NETWORK_MODE_AUTO

    def to_request(self) -> str:
        return build_request({
            "NetworkMode": self.network_mode,
            "NetworkBand": self.network_band,
            "LTEBand": self.lte_band,
        })


class CurrentPlmn(DeviceRecord):
    """Registered operator from ``/api/net/current-plmn``."""

    state: str = Field(default="", alias="State")
    full_name: str = Field(default="", alias="FullName")
    short_name: str = Field(default="", alias="ShortName")
    numeric: str = Field(default="", alias="Numeric")
    rat: str = Field(default="", alias="Rat")

    @property
    def operator_name(self) -> Optional[str]:
        return self.full_name or self.short_name or None


# ========== SMS ==========

SMS_STATUS_TEXT = {
    0: "Unread",
    1: "Read",
    2: "Pending send",
    3: "Sent",
    4: "Send failed",
}

SMS_TYPE_TEXT = {
    1: "Single",
    2: "Multipart",
    5: "Unicode",
    7: "Delivery confirmation",
    8: "Delivery failed",
}

SMS_BOX_TYPES = (
    SMS_BOX_LOCAL_INBOX,
    SMS_BOX_LOCAL_OUTBOX,
    SMS_BOX_LOCAL_DRAFT,
    SMS_BOX_SIM_INBOX,
    SMS_BOX_SIM_OUTBOX,
    SMS_BOX_SIM_DRAFT,
)


class SmsCount(DeviceRecord):
    """Message counters from ``/api/sms/sms-count``."""

    local_unread: int = Field(default=0, alias="LocalUnread")
    local_inbox: int = Field(default=0, alias="LocalInbox")
    local_outbox: int = Field(default=0, alias="LocalOutbox")
    local_draft: int = Field(default=0, alias="LocalDraft")
    sim_unread: int = Field(default=0, alias="SimUnread")
    sim_inbox: int = Field(default=0, alias="SimInbox")
    sim_outbox: int = Field(default=0, alias="SimOutbox")
    sim_draft: int = Field(default=0, alias="SimDraft")
    new_msg: int = Field(default=0, alias="NewMsg")

    @field_validator("*", mode="before")
    @classmethod
    def parse_counters(cls, v):
        return _int_or_default(v)

    @property
    def total_unread(self) -> int:
        return self.local_unread + self.sim_unread

    @property
    def total_inbox(self) -> int:
        return self.local_inbox + self.sim_inbox

    @property
    def has_new_messages(self) -> bool:
        return self.new_msg > 0


class SmsMessage(DeviceRecord):
    """One ``<Message>`` of an SMS list."""

    status: int = Field(alias="Smstat")
    index: str = Field(alias="Index")
    phone: str = Field(default="", alias="Phone")
    content: str = Field(default="", alias="Content")
    date: str = Field(default="", alias="Date")
    sca: Optional[str] = Field(default=None, alias="Sca")
    save_type: str = Field(default="", alias="SaveType")
    priority: int = Field(default=0, alias="Priority")
    sms_type: int = Field(default=1, alias="SmsType")

    @field_validator("sca", mode="before")
    @classmethod
    def empty_sca(cls, v):
        return v or None

    @field_validator("priority", mode="before")
    @classmethod
    def parse_priority(cls, v):
        return _int_or_default(v)

    @field_validator("sms_type", mode="before")
    @classmethod
    def parse_sms_type(cls, v):
        return _int_or_default(v, 1)

    @property
    def is_unread(self) -> bool:
        return self.status == 0

    @property
    def is_read(self) -> bool:
        return self.status == 1

    @property
    def status_text(self) -> str:
        return SMS_STATUS_TEXT.get(self.status, f"Unknown ({self.status})")

    @property
    def sms_type_text(self) -> str:
        return SMS_TYPE_TEXT.get(self.sms_type, f"Unknown ({self.sms_type})")


class SmsList(DeviceRecord):
    """Page of messages from ``/api/sms/sms-list``."""

    count: Optional[int] = Field(default=None, alias="Count")
    messages: list[SmsMessage] = Field(default_factory=list)

    @field_validator("count", mode="before")
    @classmethod
    def parse_count(cls, v):
        try:
            return int(v)
        except (TypeError, ValueError):
            return None

    @classmethod
    def from_xml(cls, text: str) -> "SmsList":
        root = parse_response_element(text)
        container = root.find("Messages")
        entries = container.findall("Message") if container is not None else []
        try:
            return cls(
                count=root.findtext("Count"),
                messages=[SmsMessage.model_validate(element_fields(e)) for e in entries],
            )
        except ValidationError as e:
            raise ResponseParseError(f"Failed to parse SmsList: {e}", response_text=text)

    @property
    def message_count(self) -> int:
        """Total reported by the device, or the number of messages on this page."""
        return self.count if self.count is not None else len(self.messages)


class SmsListRequest(BaseModel):
    """Paging and ordering of an SMS list request."""

    page_index: int = Field(default=1, ge=1)
    read_count: int = Field(default=20, ge=1, le=SMS_MAX_READ_COUNT)
    box_type: int = SMS_BOX_LOCAL_INBOX
    sort_type: int = SMS_SORT_BY_TIME
    ascending: bool = False
    unread_preferred: bool = False

    @field_validator("box_type")
    @classmethod
    def validate_box_type(cls, v):
        if v not in SMS_BOX_TYPES:
            raise ValueError(f"box_type must be one of {SMS_BOX_TYPES}")
        return v

    @field_validator("sort_type")
    @classmethod
    def validate_sort_type(cls, v):
        if v not in (SMS_SORT_BY_TIME, SMS_SORT_BY_NAME):
            raise ValueError("sort_type must be 0 (time) or 1 (name)")
        return v

    def to_request(self) -> str:
        return build_request({
            "PageIndex": self.page_index,
            "ReadCount": self.read_count,
            "BoxType": self.box_type,
            "SortType": self.sort_type,
            "Ascending": int(self.ascending),
            "UnreadPreferred": int(self.unread_preferred),
        })


# ========== DHCP ==========


def gateway_subnet(ip: str) -> int:
    """Third octet x of a gateway address ``192.168.x.1``.

    Raises:
        ConfigurationError: If ``ip`` is not of that form
    """
    parts = ip.split(".")
    if len(parts) != 4 or parts[:2] != ["192", "168"] or parts[3] != "1":
        raise ConfigurationError("Gateway IP must be in format 192.168.x.1")
    try:
        subnet = int(parts[2])
    except ValueError:
        raise ConfigurationError("Invalid subnet number")
    if not 1 <= subnet <= 255:
        raise ConfigurationError("Subnet number must be between 1 and 255")
    return subnet


class DhcpSettings(DeviceRecord):
    """LAN and DHCP server settings from ``/api/dhcp/settings``."""

    dhcp_ip_address: str = Field(alias="DhcpIPAddress")
    dhcp_lan_netmask: str = Field(default="255.255.255.0", alias="DhcpLanNetmask")
    dhcp_status: str = Field(default="1", alias="DhcpStatus")
    dhcp_start_ip_address: str = Field(default="", alias="DhcpStartIPAddress")
    dhcp_end_ip_address: str = Field(default="", alias="DhcpEndIPAddress")
    dhcp_lease_time: str = Field(default="86400", alias="DhcpLeaseTime")
    dns_status: str = Field(default="1", alias="DnsStatus")
    primary_dns: str = Field(default="", alias="PrimaryDns")
    secondary_dns: str = Field(default="", alias="SecondaryDns")

    @property
    def dhcp_enabled(self) -> bool:
        return self.dhcp_status == "1"

    @property
    def dns_enabled(self) -> bool:
        return self.dns_status == "1"

    def with_gateway(self, ip: str) -> "DhcpSettings":
        """Move the LAN to the ``192.168.x.0/24`` network of gateway ``ip``.

        The DHCP pool becomes ``.100`` to ``.200`` and both DNS servers point at
        the gateway; netmask, lease time and the status flags are kept.

        Raises:
            ConfigurationError: If ``ip`` is not of the form ``192.168.x.1``
        """
        subnet = gateway_subnet(ip)
        return self.model_copy(update={
            "dhcp_ip_address": ip,
            "dhcp_start_ip_address": f"192.168.{subnet}.100",
            "dhcp_end_ip_address": f"192.168.{subnet}.200",
            "primary_dns": ip,
            "secondary_dns": ip,
        })

    def to_request(self) -> str:
        return build_request({
            "DhcpIPAddress": self.dhcp_ip_address,
            "DhcpLanNetmask": self.dhcp_lan_netmask,
            "DhcpStatus": self.dhcp_status,
            "DhcpStartIPAddress": self.dhcp_start_ip_address,
            "DhcpEndIPAddress": self.dhcp_end_ip_address,
            "DhcpLeaseTime": self.dhcp_lease_time,
            "DnsStatus": self.dns_status,
            "PrimaryDns": self.primary_dns,
            "SecondaryDns": self.secondary_dns,
        })
