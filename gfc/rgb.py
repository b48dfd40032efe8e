"""Byte payloads stored as magenta pixels.

Each byte ``b`` becomes the pixel ``(b, 0, b)`` on a square grid; cells past
the end of the payload are white and are skipped when decoding.
"""

from __future__ import annotations

import math

Pixel = tuple[int, int, int]

WHITE: Pixel = (255, 255, 255)


def encode_pixels(data: bytes) -> list[list[Pixel]]:
    side = math.ceil(math.sqrt(len(data)))
    grid: list[list[Pixel]] = []
    for y in range(side):
        row: list[Pixel] = []
        for x in range(side):
            index = x + y * side
            row.append((data[index], 0, data[index]) if index < len(data) else WHITE)
        grid.append(row)
    return grid


def decode_pixels(grid: list[list[Pixel]]) -> bytes:
    out = bytearray()
    for row in grid:
        for pixel in row:
            if tuple(pixel) == WHITE:
                continue
            out.append(pixel[2] & 0xFF)
    return bytes(out)
