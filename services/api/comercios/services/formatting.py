"""Text formatting for API payloads.

- BRL currency ("R$ 1.234.567,89") for aggregate revenue values
- Elapsed durations in the compact unit style used by `tempo_processamento`
  ("850µs", "12.5ms", "1.204s", "1m3.5s")
"""

_BRL_SEPARATORS = str.maketrans({",": ".", ".": ","})

_NS_PER_US = 1_000
_NS_PER_MS = 1_000_000
_NS_PER_S = 1_000_000_000
_NS_PER_MIN = 60 * _NS_PER_S
_NS_PER_HOUR = 60 * _NS_PER_MIN


def format_brl(value: float) -> str:
    """Format a value as Brazilian reais: thousands '.', decimals ','."""
    return f"R$ {value:,.2f}".translate(_BRL_SEPARATORS)


def format_elapsed(seconds: float) -> str:
    """Format an elapsed time given in seconds.

    Sub-second values use the largest unit that keeps the integer part
    non-zero (ns, µs, ms). Longer values use h/m/s components. Trailing
    fractional zeros are dropped.
    """
    ns = int(round(seconds * _NS_PER_S))
    if ns == 0:
        return "0s"

    sign = "-" if ns < 0 else ""
    ns = abs(ns)

    if ns < _NS_PER_US:
        return f"{sign}{ns}ns"
    if ns < _NS_PER_MS:
        return f"{sign}{_decimal(ns, _NS_PER_US)}µs"
    if ns < _NS_PER_S:
        return f"{sign}{_decimal(ns, _NS_PER_MS)}ms"

    hours, ns = divmod(ns, _NS_PER_HOUR)
    minutes, ns = divmod(ns, _NS_PER_MIN)
    out = sign
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return f"{out}{_decimal(ns, _NS_PER_S)}s"


def _decimal(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{frac:0{width}d}".rstrip("0")
