"""
Huawei Dongle Client - API Endpoint Constants

This module contains the device API paths and protocol header names used
throughout the client. Paths are relative to the device base URL.
"""

# Device defaults
DEFAULT_DEVICE_URL = "http://192.168.8.1"
DEFAULT_USER_AGENT = "huawei-dongle-client/1.0"

# Session and token
HOMEPAGE_PATH = "/"
API_WEBSERVER_TOKEN = "/api/webserver/token"

# Authentication
API_USER_STATE_LOGIN = "/api/user/state-login"
API_USER_LOGIN = "/api/user/login"
API_USER_LOGOUT = "/api/user/logout"

# Device
API_DEVICE_INFORMATION = "/api/device/information"
API_DEVICE_CONTROL = "/api/device/control"

# Monitoring
API_MONITORING_STATUS = "/api/monitoring/status"

# Network
API_NET_MODE = "/api/net/net-mode"
API_NET_CURRENT_PLMN = "/api/net/current-plmn"

# SMS
API_SMS_COUNT = "/api/sms/sms-count"
API_SMS_LIST = "/api/sms/sms-list"
API_SMS_SEND = "/api/sms/send-sms"
API_SMS_DELETE = "/api/sms/delete-sms"
API_SMS_SET_READ = "/api/sms/set-read"

# DHCP
API_DHCP_SETTINGS = "/api/dhcp/settings"

# Request headers
TOKEN_HEADER = "__RequestVerificationToken"
REQUESTED_WITH_HEADER = "X-Requested-With"
REQUESTED_WITH_VALUE = "XMLHttpRequest"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=UTF-8"

# Response headers that may carry a rotated token, in order of preference
TOKEN_RESPONSE_HEADERS = (
    "__RequestVerificationToken",
    "__RequestVerificationTokenone",
    "__RequestVerificationTokentwo",
)

# Headers never written to logs in clear text
SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "cookie",
        "set-cookie",
        "__requestverificationtoken",
        "__requestverificationtokenone",
        "__requestverificationtokentwo",
    }
)

# Device control codes for API_DEVICE_CONTROL
DEVICE_CONTROL_REBOOT = 1
DEVICE_CONTROL_POWER_OFF = 4

# Login state values (<State> in API_USER_STATE_LOGIN)
LOGIN_STATE_LOGGED_IN = 0
LOGIN_STATE_NOT_LOGGED_IN = -1
LOGIN_STATE_REPEAT_LOGIN_REQUIRED = -2

# Band masks sent with a network mode change when none are given
DEFAULT_NETWORK_BAND = "3fffffff"
DEFAULT_LTE_BAND = "80800C5"

# SMS boxes (<BoxType> in API_SMS_LIST)
SMS_BOX_LOCAL_INBOX = 1
SMS_BOX_LOCAL_OUTBOX = 2
SMS_BOX_LOCAL_DRAFT = 3
SMS_BOX_SIM_INBOX = 4
SMS_BOX_SIM_OUTBOX = 5
SMS_BOX_SIM_DRAFT = 6

# SMS list ordering (<SortType> in API_SMS_LIST)
SMS_SORT_BY_TIME = 0
SMS_SORT_BY_NAME = 1

# Largest page the device returns from API_SMS_LIST
SMS_MAX_READ_COUNT = 50
