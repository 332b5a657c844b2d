import logging

from string_analyzer import config
from string_analyzer.app import create_app

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = create_app(config.DATABASE_URL)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("string_analyzer.main:app", host="0.0.0.0", port=config.PORT)
