from __future__ import annotations


class SettingsBindError(RuntimeError):
    pass


class PersistenceError(SettingsBindError):
    """A settings store refused or failed a write."""


class NotAMemberError(SettingsBindError):
    """An option was handed to a group that does not own it."""


class NotAvailableError(SettingsBindError):
    """The option is hidden or unsupported on this surface."""


class AppearanceError(SettingsBindError):
    pass
