"""
Huawei Dongle Client - Endpoint Layer

Thin endpoint classes built on the request pipeline.
"""

from .auth import AuthApi
from .device import DeviceApi
from .dhcp import DhcpApi
from .models import (
    CurrentPlmn,
    DeviceInformation,
    DhcpSettings,
    LoginState,
    MonitoringStatus,
    NetworkMode,
    SmsCount,
    SmsList,
    SmsListRequest,
    SmsMessage,
)
from .monitoring import MonitoringApi
from .network import NetworkApi
from .sms import SmsApi

__all__ = [
    "AuthApi",
    "DeviceApi",
    "MonitoringApi",
    "NetworkApi",
    "SmsApi",
    "DhcpApi",
    "LoginState",
    "DeviceInformation",
    "MonitoringStatus",
    "NetworkMode",
    "CurrentPlmn",
    "SmsCount",
    "SmsList",
    "SmsListRequest",
    "SmsMessage",
    "DhcpSettings",
]
