from typing import Sequence, Tuple, Union

from common.algo_params import AlgorithmParameters

Buffer = Union[bytes, bytearray, memoryview, Sequence[int]]


def reverse_bits(value: int, width: int = 8) -> int:
    """Reverses the 'width' least significant bits of 'value' (bit 0 <-> bit width-1). Bits above are ignored."""
    result = 0
    for _ in range(width):
        result = (result << 1) | (value & 1)
        value >>= 1
    return result


def bitwise_crc(params: AlgorithmParameters, data: Buffer) -> int:
    """Reference implementation: plain bit-by-bit polynomial division, no table."""
    top_bit = 1 << (params.hash_size - 1)
    mask = params.mask
    crc = params.init

    for byte in data:
        if params.reflect_input:
            byte = reverse_bits(byte)
        for i in range(7, -1, -1):
            feedback = bool(crc & top_bit) != bool((byte >> i) & 1)
            crc = (crc << 1) & mask
            if feedback:
                crc ^= params.polynomial

    if params.reflect_output:
        crc = reverse_bits(crc, params.hash_size)
    return (crc ^ params.xor_out) & mask


class CrcEngine:
    """Table-driven CRC calculator.

    The 256-entry lookup table is compiled once from the parameters; afterwards the engine is read-only,
    so one instance can serve any number of compute() calls, from any number of threads.

    The register runs reflected (LSB-first, shifting right) when the input is reflected, and unreflected
    (MSB-first, shifting left) otherwise. Widths below 8 bits are compiled in an 8-bit register with the
    polynomial aligned to its top.
    """

    def __init__(self, params: AlgorithmParameters) -> None:
        params.validate()

        self.parameters: AlgorithmParameters = params
        self.mask: int = params.mask

        self._reflected: bool = params.reflect_input
        self._register_bits: int = max(params.hash_size, 8)
        self._pad: int = self._register_bits - params.hash_size

        self.table: Tuple[int, ...] = tuple(self._create_table_entry(i) for i in range(256))

    @property
    def initial_register(self) -> int:
        """Register value the fold starts with. Reflected in the same way as the table entries."""
        init = self.parameters.init
        return reverse_bits(init, self.parameters.hash_size) if self._reflected else init

    def compute(self, buffer: Buffer, offset: int = 0, length: int | None = None) -> int:
        """Calculates the CRC of buffer[offset : offset + length]. A missing length means 'up to the end'."""
        size = len(buffer)
        if length is None:
            length = size - offset
        if offset < 0 or length < 0 or offset + length > size:
            raise IndexError(f"Range [{offset}..{offset + length}) is outside of the buffer ({size} bytes)")

        crc = self._fold(self.initial_register, buffer[offset : offset + length])

        params = self.parameters
        if params.reflect_input != params.reflect_output:
            crc = reverse_bits(crc, params.hash_size)
        return (crc ^ params.xor_out) & self.mask

    def _fold(self, crc: int, data: Buffer) -> int:
        table = self.table
        mask = self.mask

        if self._reflected:
            for d in data:
                crc = (table[(crc ^ d) & 0xFF] ^ (crc >> 8)) & mask
        else:
            # Bring the top byte of the register to bits 0..7
            up = self._pad
            down = self._register_bits - 8
            for d in data:
                crc = (table[(((crc << up) >> down) ^ d) & 0xFF] ^ (crc << 8)) & mask
        return crc

    def _create_table_entry(self, index: int) -> int:
        bits = self._register_bits
        register_mask = (1 << bits) - 1
        top_bit = 1 << (bits - 1)
        poly = self.parameters.polynomial << self._pad
        r = index

        if self.parameters.reflect_input:
            r = reverse_bits(r, bits)
        elif bits > 8:
            r <<= bits - 8

        for _ in range(8):
            if r & top_bit:
                r = ((r << 1) ^ poly) & register_mask
            else:
                r = (r << 1) & register_mask

        if self._reflected:
            r = reverse_bits(r, bits)
        else:
            r >>= self._pad

        return r & self.mask
