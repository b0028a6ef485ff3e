"""
Deterministic fixed-point arithmetic for money and rate calculations.

Two representations are used:
- WAD: unsigned integers scaled by 10**18. Every amount and rate that crosses
  the ledger boundary is a WAD value (1.5 units == 1_500_000_000_000_000_000).
- 64.64: signed binary fixed point with 64 fractional bits, bounded to the
  signed 128-bit range. The annuity series is evaluated in 64.64 and converted
  back to WAD at the end.

Every operation fails with ArithmeticOverflowError when its true result leaves
the representable range and with DivideByZeroError on a zero divisor. No
floating point is involved anywhere.
"""

from credit_ledger.domain.exceptions import ArithmeticOverflowError, DivideByZeroError

WAD = 10**18
MAX_UINT256 = 2**256 - 1

ONE_64x64 = 1 << 64
MIN_64x64 = -(1 << 127)
MAX_64x64 = (1 << 127) - 1
MAX_UINT64 = (1 << 64) - 1


def _check_uint256(value: int, operation: str) -> int:
    if value < 0:
        raise ArithmeticOverflowError(f"{operation} underflow: result {value} is negative")
    if value > MAX_UINT256:
        raise ArithmeticOverflowError(f"{operation} overflow: result exceeds 2**256 - 1")
    return value


def _check_64x64(value: int, operation: str) -> int:
    if value < MIN_64x64 or value > MAX_64x64:
        raise ArithmeticOverflowError(f"{operation} overflow: result outside 64.64 range")
    return value


# WAD arithmetic


def checked_add(a: int, b: int) -> int:
    return _check_uint256(a + b, "add")


def checked_sub(a: int, b: int) -> int:
    return _check_uint256(a - b, "sub")


def wad_mul(a: int, b: int) -> int:
    """Multiply two WAD values, rounding down"""
    _check_uint256(a, "mul")
    _check_uint256(b, "mul")
    return _check_uint256(a * b // WAD, "mul")


def wad_div(a: int, b: int) -> int:
    """Divide two WAD values, rounding down"""
    if b == 0:
        raise DivideByZeroError(f"Cannot divide {a} by zero")
    _check_uint256(a, "div")
    _check_uint256(b, "div")
    return _check_uint256(a * WAD // b, "div")


def wad_pow(base: int, exponent: int) -> int:
    """
    Raise a WAD value to a non-negative integer power by repeated squaring.

    Each multiplication is checked, so an intermediate that leaves the uint256
    range aborts the whole computation.
    """
    if exponent < 0:
        raise ArithmeticOverflowError(f"Negative exponent {exponent} is not supported")

    result = WAD
    while exponent:
        if exponent & 1:
            result = wad_mul(result, base)
        exponent >>= 1
        if exponent:
            base = wad_mul(base, base)
    return result


# 64.64 binary fixed point


def from_uint(x: int) -> int:
    if x < 0 or x > MAX_UINT64 >> 1:
        raise ArithmeticOverflowError(f"{x} does not fit the 64.64 integer part")
    return x << 64


def to_uint(x: int) -> int:
    if x < 0:
        raise ArithmeticOverflowError(f"Cannot convert negative 64.64 value {x} to uint")
    return x >> 64


def divu(x: int, y: int) -> int:
    """Divide two unsigned integers into a 64.64 value, rounding down"""
    if y == 0:
        raise DivideByZeroError(f"Cannot divide {x} by zero")
    if x < 0 or y < 0:
        raise ArithmeticOverflowError("divu operands must be unsigned")
    return _check_64x64((x << 64) // y, "divu")


def mulu(x: int, y: int) -> int:
    """Multiply a 64.64 value by an unsigned integer, returning an unsigned integer"""
    if y == 0:
        return 0
    if x < 0 or y < 0:
        raise ArithmeticOverflowError("mulu operands must be non-negative")
    return _check_uint256((x * y) >> 64, "mulu")


def add(x: int, y: int) -> int:
    return _check_64x64(x + y, "add")


def sub(x: int, y: int) -> int:
    return _check_64x64(x - y, "sub")


def mul(x: int, y: int) -> int:
    return _check_64x64((x * y) >> 64, "mul")


def div(x: int, y: int) -> int:
    """Divide two 64.64 values, truncating toward zero"""
    if y == 0:
        raise DivideByZeroError(f"Cannot divide {x} by zero")
    result = (abs(x) << 64) // abs(y)
    if (x < 0) != (y < 0):
        result = -result
    return _check_64x64(result, "div")


def inv(x: int) -> int:
    """Reciprocal of a 64.64 value, truncating toward zero"""
    if x == 0:
        raise DivideByZeroError("Cannot invert zero")
    result = (1 << 128) // abs(x)
    if x < 0:
        result = -result
    return _check_64x64(result, "inv")


def pow(x: int, y: int) -> int:
    """
    Raise a 64.64 value to a non-negative integer power.

    Binary exponentiation over a 128-bit mantissa. Values above one are
    normalized so the mantissa stays in [2**127, 2**128) and the binary
    exponent is tracked separately; the result is checked against the 64.64
    range once at the end, so long terms with small rates never overflow an
    intermediate.
    """
    if y < 0:
        raise ArithmeticOverflowError(f"Negative exponent {y} is not supported")

    negative = x < 0 and y & 1 == 1
    abs_x = -x if x < 0 else x
    abs_result = 1 << 128

    if abs_x <= ONE_64x64:
        abs_x <<= 63
        while y:
            for bit in (0x1, 0x2, 0x4, 0x8):
                if y & bit:
                    abs_result = abs_result * abs_x >> 127
                abs_x = abs_x * abs_x >> 127
            y >>= 4
        abs_result >>= 64
    else:
        abs_x_shift = 63
        if abs_x < 1 << 96:
            abs_x <<= 32
            abs_x_shift -= 32
        if abs_x < 1 << 112:
            abs_x <<= 16
            abs_x_shift -= 16
        if abs_x < 1 << 120:
            abs_x <<= 8
            abs_x_shift -= 8
        if abs_x < 1 << 124:
            abs_x <<= 4
            abs_x_shift -= 4
        if abs_x < 1 << 126:
            abs_x <<= 2
            abs_x_shift -= 2
        if abs_x < 1 << 127:
            abs_x <<= 1
            abs_x_shift -= 1

        result_shift = 0
        while y:
            if abs_x_shift >= 64:
                raise ArithmeticOverflowError("pow overflow: base grows beyond 64.64 range")

            if y & 0x1:
                abs_result = abs_result * abs_x >> 127
                result_shift += abs_x_shift
                if abs_result > 1 << 128:
                    abs_result >>= 1
                    result_shift += 1

            abs_x = abs_x * abs_x >> 127
            abs_x_shift <<= 1
            if abs_x >= 1 << 128:
                abs_x >>= 1
                abs_x_shift += 1

            y >>= 1

        if result_shift >= 64:
            raise ArithmeticOverflowError("pow overflow: result exceeds 64.64 range")
        abs_result >>= 64 - result_shift

    return _check_64x64(-abs_result if negative else abs_result, "pow")
