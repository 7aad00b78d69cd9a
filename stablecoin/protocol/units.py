"""Fixed-point units used by the protocol contracts.

wad: token quantities, 18 decimals.
ray: rates and ratios, 27 decimals.
rad: debt values (wad * ray), 45 decimals.
"""

from decimal import Decimal, InvalidOperation, localcontext

WAD = 10**18
BLN = 10**9
RAY = 10**27
RAD = 10**45

BPS = 10_000
SECONDS_PER_YEAR = 31_536_000


def _check_non_negative(*values: int) -> None:
    for v in values:
        if v < 0:
            raise ValueError(f"fixed-point operand must be non-negative, got {v}")


def wei_to_ray(value: int) -> int:
    """Rescale a wad quantity to ray precision."""
    return value * RAY // WAD


def rmul(x: int, y: int) -> int:
    _check_non_negative(x, y)
    return x * y // RAY


def wmul(x: int, y: int) -> int:
    _check_non_negative(x, y)
    return x * y // WAD


def rdiv(x: int, y: int) -> int:
    _check_non_negative(x, y)
    return x * RAY // y


def wdiv(x: int, y: int) -> int:
    _check_non_negative(x, y)
    return x * WAD // y


def rpow(x: int, n: int, base: int = RAY) -> int:
    """Raise fixed-point ``x`` to the integer power ``n``.

    Exponentiation by squaring, rounding half-up after every
    multiplication, so results match the contracts' ``rpow`` to the wei.
    """
    _check_non_negative(x, n)
    if n == 0:
        return base
    if x == 0:
        return 0

    half = base // 2
    z = x if n % 2 else base
    n //= 2
    while n:
        x = (x * x + half) // base
        if n % 2:
            z = (z * x + half) // base
        n //= 2
    return z


def parse_units(value: str | int | float, decimals: int) -> int:
    """Convert a human-readable decimal amount into an integer.

    Mirrors ethers' ``parseUnits``: ``parse_units("0.002", 18) == 2 * 10**15``.
    """
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"invalid decimal value: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"invalid decimal value: {value!r}")
    if amount < 0:
        raise ValueError(f"negative amount: {value!r}")

    with localcontext() as ctx:
        ctx.prec = 120
        scaled = amount.scaleb(decimals)
        if scaled != scaled.to_integral_value():
            raise ValueError("fractional component exceeds decimals")
        return int(scaled)


def format_units(value: int, decimals: int) -> str:
    """Inverse of :func:`parse_units`, always keeping one fractional digit."""
    sign = "-" if value < 0 else ""
    whole, frac = divmod(abs(value), 10**decimals)
    frac_str = str(frac).rjust(decimals, "0").rstrip("0") or "0"
    return f"{sign}{whole}.{frac_str}"


def wad_to_float(value: int) -> float:
    return value / WAD


def ray_to_float(value: int) -> float:
    return value / float(RAY)


def rad_to_float(value: int) -> float:
    return value / float(RAD)


def bps_to_float(bps: int) -> float:
    """Convert basis points (1e4 scale) to a decimal fraction."""
    return bps / BPS


# ---------------------------------------------------------------------------
# bytes32 helpers
# ---------------------------------------------------------------------------

def format_bytes32_string(text: str) -> bytes:
    """Encode ``text`` as a null-padded bytes32 (collateral pool ids, roles)."""
    raw = text.encode("utf-8")
    if len(raw) > 31:
        raise ValueError("bytes32 string must be less than 32 bytes")
    return raw.ljust(32, b"\x00")


def parse_bytes32_string(value: bytes) -> str:
    if len(value) != 32:
        raise ValueError(f"invalid bytes32 length: {len(value)}")
    return value.rstrip(b"\x00").decode("utf-8")


def format_bytes32_int(value: int) -> bytes:
    """Left-pad an integer to 32 bytes, big endian."""
    _check_non_negative(value)
    return value.to_bytes(32, "big")


def almost_equal(expected: int, actual: int, tolerance_divisor: int = BPS) -> bool:
    """True when ``actual`` is within ``expected / tolerance_divisor`` of ``expected``."""
    return abs(expected - actual) <= abs(expected) // tolerance_divisor
