# checkout_api/__main__.py

import uvicorn

from checkout_api.config import HOST, PORT


if __name__ == "__main__":
    uvicorn.run("checkout_api.main:app", host=HOST, port=PORT)
