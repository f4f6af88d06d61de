# ============================================================================
# FILE: moodtune/main.py
# ============================================================================
import uvicorn
from moodtune.config import Settings
from moodtune.server import create_app

settings = Settings()

# ASGI entry point: uvicorn moodtune.main:app
app = create_app(settings)

if __name__ == "__main__":
    uvicorn.run("moodtune.main:app", host=settings.HOST, port=settings.PORT)
