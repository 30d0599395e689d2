import logging

import uvicorn
from eatvienna.api.api_run import app
from eatvienna.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL


def main():
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    # Print a friendly message that points to the URL you can open in a browser
    print(f"Uvicorn running on http://localhost:{APP_PORT} (Press CTRL+C to quit)")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
