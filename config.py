import os

# Snapshot storage
STORE_NAME = os.getenv("STORE_NAME", "camara-store")
STORE_DIR = os.getenv("STORE_DIR", os.path.join(os.getcwd(), "data"))

# Seed admin credentials via env (for demo)
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@camara.studio")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
ADMIN_NAME = "Admin"

# Media tooling used for video thumbnails and durations
FFMPEG_PATH = os.getenv("FFMPEG_PATH", "ffmpeg")
FFPROBE_PATH = os.getenv("FFPROBE_PATH", "ffprobe")

# Seconds between simulated progress steps; unset keeps each pipeline's own pace
UPLOAD_STEP_DELAY = float(os.environ["UPLOAD_STEP_DELAY"]) if os.getenv("UPLOAD_STEP_DELAY") else None

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", 8000))

# Open upload sessions: idle ones expire, and the oldest are dropped past the cap
UPLOAD_SESSION_TTL = float(os.getenv("UPLOAD_SESSION_TTL", 3600))
MAX_UPLOAD_SESSIONS = int(os.getenv("MAX_UPLOAD_SESSIONS", 20))
