import os

import uvicorn

from crossword_api.app import app


if __name__ == "__main__":
    uvicorn.run(
        app,
        host=os.environ.get("SERVER_HOST", "127.0.0.1"),
        port=int(os.environ.get("SERVER_PORT", "8000")),
    )
