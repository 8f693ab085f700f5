import numpy as np
from tqdm import tqdm

"""
CONSTANTS
"""
# Height levels are discrete, inclusive on both ends
MIN_HEIGHT_LEVEL = -3
MAX_HEIGHT_LEVEL = 3

DEFAULT_TERRAIN = "grass"

# numpy seeds must be non-negative; integer seeds are taken modulo this
SEED_MODULUS = 2 ** 64

TERRAIN_BY_HEIGHT_LEVEL = {
    -3: "deepest_trench",
    -2: "deep_water",
    -1: "coast",
    0: "grass",
    1: "hill",
    2: "mountain",
    3: "highest_peak",
}

# Terrain colors
TERRAIN_COLORS = {
    "deepest_trench": (0, 0, 0.2),
    "deep_water": (0, 0, 0.6),
    "coast": (0, 0, 1),
    "grass": (0, 0.6, 0),
    "hill": (0, 0.4, 0),
    "mountain": (0.7, 0.7, 0.7),
    "highest_peak": (1, 1, 1),
}

def terrain_for_height_level(height_level):
    """
    Map a height level to its terrain category. Unmapped levels are grass.
    """
    return TERRAIN_BY_HEIGHT_LEVEL.get(height_level, DEFAULT_TERRAIN)

def create_rng(seed):
    """
    Create the random generator for one generation run. Create it once and pass it to assign_terrain().

    Any integer is a valid seed. Negative seeds are wrapped into numpy's unsigned 64-bit seed range,
    so seed -1 and seed 2**64 - 1 give the same world.
    """
    return np.random.default_rng(int(seed) % SEED_MODULUS)

def assign_terrain(tiles, rng, verbose=False):
    """
    Assign a height level, terrain category and color to each tile.

    Exactly one integer in [MIN_HEIGHT_LEVEL, MAX_HEIGHT_LEVEL] is drawn per tile, in ascending
    tile id order, so the same seed always reproduces the same world.
    """
    for tile in tqdm(sorted(tiles), position=0, desc="Assigning terrain", disable=not verbose):
        tile.height_level = int(rng.integers(MIN_HEIGHT_LEVEL, MAX_HEIGHT_LEVEL, endpoint=True))
        tile.terrain = terrain_for_height_level(tile.height_level)
        tile.color = TERRAIN_COLORS[tile.terrain]
