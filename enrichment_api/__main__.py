"""Run the API with uvicorn: ``python -m enrichment_api``."""

from dotenv import load_dotenv

load_dotenv()

import uvicorn

from enrichment_api.core import config


def main() -> None:
    uvicorn.run("enrichment_api.main:app", host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
