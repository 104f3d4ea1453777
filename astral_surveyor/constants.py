"""Universe-wide constants for Astral Surveyor."""

# --- Display ---
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
FPS = 60
TITLE = "Astral Surveyor"

# --- Colors (RGB) ---
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
DARK_GREY = (30, 30, 40)
LIGHT_GREY = (180, 180, 190)
STAR_WHITE = (220, 220, 235)
STAR_DIM = (140, 140, 160)

# HUD / UI accent colors
AMBER = (255, 191, 0)
CYAN = (0, 200, 220)
RED_ALERT = (200, 40, 40)
HULL_GREEN = (40, 200, 80)

# --- UI Panel ---
PANEL_BG = (20, 20, 30, 200)
PANEL_BORDER = (60, 60, 80)

# --- Metadata ---
GAME_TITLE = "ASTRAL SURVEYOR"
GAME_SUBTITLE = "An infinite sky, charted one discovery at a time"
GAME_VERSION = "0.4.0"
SHARE_LINK_BASE = "astral://universe"

# --- Chunking ---
CHUNK_SIZE = 2000
LOAD_RADIUS = 1

# --- Background stars ---
BACKGROUND_STARS_MIN = 40
BACKGROUND_STARS_MAX = 80  # exclusive
BACKGROUND_STAR_COLORS = ["#ffffff", "#ffddaa", "#aaddff", "#ffaa88", "#88aaff"]

# --- Star systems ---
STAR_SYSTEM_SPAWN_CHANCE = 0.08
STAR_SYSTEM_MARGIN = 250
BINARY_CHANCE = 0.10
BINARY_DISTANCE = (150.0, 300.0)
STAR_RADIUS = (80.0, 140.0)
STAR_DISCOVERY_PADDING = 400
STAR_BRAKING_PADDING = 100

# (label, probability, min planets, max planets inclusive)
PLANET_COUNT_BANDS: list[tuple[str, float, int, int]] = [
    ("empty", 0.10, 0, 0),
    ("single", 0.15, 1, 1),
    ("small", 0.60, 2, 5),
    ("medium", 0.12, 6, 8),
    ("large", 0.03, 9, 12),
]

PLANET_ORBIT_MARGIN = 60
PLANET_ORBIT_MAX = 800.0
PLANET_ZONE_SPAN = 800.0
PLANET_RADIUS = (8.0, 20.0)
PLANET_DISCOVERY_PADDING = 30
PLANET_BASE_SPEED = 0.08
PLANET_REFERENCE_DISTANCE = 120.0

# --- Moons ---
MOON_GAS_GIANT_CHANCE = 0.6
MOON_GAS_GIANT_MAX = 4
MOON_LARGE_PLANET_CHANCE = 0.25
MOON_LARGE_PLANET_MAX = 2
MOON_LARGE_PLANET_RADIUS = 15.0
MOON_OTHER_CHANCE = 0.10
MOON_OTHER_MAX = 1
MOON_ORBIT_GAP = (15.0, 50.0)
MOON_BASE_SPEED = 0.2
MOON_SIZE_RATIO = (0.1, 0.2)
MOON_PARENT_COLOR_CHANCE = 0.3
MOON_MIN_RADIUS = 2.0
MOON_DISCOVERY_PADDING = 20

# --- Comets ---
COMET_SPAWN_CHANCE = 0.2
COMET_MAX_PER_STAR = 3
COMET_SEMI_MAJOR_AXIS = (300.0, 1500.0)
COMET_ECCENTRICITY = (0.6, 0.95)
COMET_PERIOD = (5000.0, 20000.0)
COMET_VISIBILITY_FACTOR = 1.0  # x semi-major axis
COMET_MAX_TAIL = 200.0

# --- Nebulae ---
NEBULA_SPAWN_CHANCE = 0.05
NEBULA_MULTIPLE_CHANCE = 0.02
NEBULA_MARGIN = 300

# --- Asteroid gardens ---
GARDEN_SPAWN_CHANCE = 0.15
GARDEN_MULTIPLE_CHANCE = 0.05
GARDEN_MARGIN = 250
GARDEN_STAR_CLEARANCE = 400.0

# --- Wormholes ---
WORMHOLE_REGION_CHUNKS = 8
WORMHOLE_PAIR_SPAN = 16  # regions between paired endpoints
WORMHOLE_PAIR_CHANCE = 0.03  # per alpha region
WORMHOLE_MARGIN = 300
WORMHOLE_RADIUS = (35.0, 45.0)
WORMHOLE_DISCOVERY_PADDING = 75

# --- Black holes ---
BLACK_HOLE_SPAWN_CHANCE = 0.000001

# --- Region-specific objects ---
REGION_OBJECT_MARGIN = 300

# --- Cosmic regions ---
REGION_SCALE = 150_000.0
REGION_MACRO_AREA = 300_000.0
REGIONS_PER_MACRO_AREA = 8
REGION_MIN_DISTANCE = 80_000.0
REGION_INFLUENCE_FALLOFF = 0.3

# --- Discovery ---
DISCOVERY_VALUES: dict[str, int] = {
    "star": 10,
    "planet": 15,
    "moon": 8,
    "nebula": 50,
    "asteroids": 25,
    "wormhole": 200,
    "blackhole": 500,
    "comet": 20,
    "protostar": 60,
    "rogue-planet": 40,
    "dark-nebula": 45,
    "crystal-garden": 55,
}

# --- Explorer ---
CAMERA_SPEED = 900.0
NUM_PARALLAX_STARS = 200
REBIRTH_SPAWN_RADIUS = (5_000.0, 20_000.0)
CAMERA_BOOST = 4.0  # shift held
MIN_ZOOM = 0.05
MAX_ZOOM = 2.0
WORMHOLE_EXIT_OFFSET = 150.0
