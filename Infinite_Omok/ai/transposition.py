"""Zobrist hashing for an unbounded board, and transposition table helpers."""

import random


class ZobristTable:
    """
    Lazily assigns 64-bit keys per (cell, colour). Each key is derived from the
    seed and the cell alone, so hashes do not depend on lookup order.
    """

    def __init__(self, seed=0):
        self.seed = seed
        self._keys = {}

    def key(self, coord, stone):
        k = (coord, int(stone))
        value = self._keys.get(k)
        if value is None:
            x, y = coord
            value = random.Random(f"{self.seed}:{x}:{y}:{int(stone)}").getrandbits(64)
            self._keys[k] = value
        return value


def zobrist_init(seed=0):
    return ZobristTable(seed)


def hash_board(board, table):
    """Compute the Zobrist hash of every stone on the board."""
    h = 0
    for coord, stone in board.stones():
        h ^= table.key(coord, stone)
    return h


def lookup(ttable, key):
    return ttable.get(key)


def store(ttable, key, value):
    ttable[key] = value
