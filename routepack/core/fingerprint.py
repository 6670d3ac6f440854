"""
Config Fingerprinting

Two configs with the same fingerprint deploy as the same function.
"""

from typing import Any

from routepack.core.models import DeployConfig

SEPARATOR = '/'


def _format(value: Any, sort: bool = False) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        items = [_format(item) for item in value]
        return ','.join(sorted(items) if sort else items)
    return str(value)


def fingerprint(config: DeployConfig) -> str:
    """
    Compute the identity string of a config.

    Fields are written in a fixed order with an empty placeholder for
    anything unset. The order of ``external`` does not matter.

    Example:
        >>> fingerprint(DeployConfig(runtime='edge', memory=1024))
        'edge///1024/////'
    """
    isr = config.isr
    fields = [
        _format(config.runtime),
        _format(config.external, sort=True),
        _format(config.regions),
        _format(config.memory),
        _format(config.max_duration),
        _format(isr.expiration if isr else None),
        _format(isr.group if isr else None),
        _format(isr.bypass_token if isr else None),
        _format(isr.allow_query if isr else None),
    ]
    return SEPARATOR.join(fields)
