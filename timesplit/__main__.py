"""Run the API with uvicorn: ``python -m timesplit``."""

import uvicorn

from .core import HOST, PORT

if __name__ == "__main__":
    uvicorn.run("timesplit.app:app", host=HOST, port=PORT)
