"""Configuration field-reference resolver.

Every generated Go file that reads a configuration value goes through this
module, so the code shape follows the chosen config format:

* ``env``: a flat struct, referenced as ``cfg.<Field>``.
* ``yaml`` / ``json`` / ``toml``: a nested struct with getter methods,
  referenced as ``cfg.Get<Field>()``.

Templates receive a :class:`ConfigFieldResolver` bound to the run's format
under the name ``config_ref``.
"""

from __future__ import annotations

from go_template_sh.config import ConfigFormat

# ---------------------------------------------------------------------------
# Field catalog
# ---------------------------------------------------------------------------

FIELD_CATALOG: tuple[str, ...] = (
    "Port",
    "Environment",
    "LogLevel",
    "PostgresURL",
    "MySQLURL",
    "MongoURL",
    "RedisURL",
    "OTLPEndpoint",
    "ServiceName",
)

_ACCESSORS: dict[str, str] = {
    "Port": "cfg.GetPort()",
    "Environment": "cfg.GetEnvironment()",
    "LogLevel": "cfg.GetLogLevel()",
    "PostgresURL": "cfg.GetPostgresURL()",
    "MySQLURL": "cfg.GetMySQLURL()",
    "MongoURL": "cfg.GetMongoURL()",
    "RedisURL": "cfg.GetRedisURL()",
    "OTLPEndpoint": "cfg.GetOTLPEndpoint()",
    "ServiceName": "cfg.GetServiceName()",
}


class UnknownConfigFieldError(KeyError):
    """Raised in strict mode for a field name outside :data:`FIELD_CATALOG`."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(field)

    def __str__(self) -> str:
        return f"unknown config field {self.field!r}; expected one of {', '.join(FIELD_CATALOG)}"


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def resolve_field(
    field: str,
    config_format: ConfigFormat | str | None = None,
    *,
    strict: bool = False,
) -> str:
    """Return the Go expression that reads *field* from the ``cfg`` value.

    Args:
        field: Logical field name, e.g. ``"PostgresURL"``.
        config_format: Format of the run. ``None``, ``""`` or a blank string
            means ``env``.
        strict: Raise :class:`UnknownConfigFieldError` for names outside the
            catalog instead of falling back to direct field access.

    Returns:
        A Go expression such as ``cfg.PostgresURL`` or ``cfg.GetPostgresURL()``.

    Raises:
        ValueError: *config_format* is not one of env, yaml, json or toml.
        UnknownConfigFieldError: *strict* is set and *field* is not in
            :data:`FIELD_CATALOG`.
    """
    if strict and field not in _ACCESSORS:
        raise UnknownConfigFieldError(field)

    if not ConfigFormat.parse(config_format).structured:
        return f"cfg.{field}"
    return _ACCESSORS.get(field, f"cfg.{field}")


class ConfigFieldResolver:
    """:func:`resolve_field` bound to a single config format.

    Instances are callable so Jinja templates can write
    ``{{ config_ref("Port") }}``.
    """

    def __init__(self, config_format: ConfigFormat | str | None = None, *, strict: bool = False) -> None:
        self.config_format = ConfigFormat.parse(config_format)
        self.strict = strict

    def __call__(self, field: str) -> str:
        return resolve_field(field, self.config_format, strict=self.strict)

    def __repr__(self) -> str:
        return f"ConfigFieldResolver({self.config_format.value!r}, strict={self.strict})"
