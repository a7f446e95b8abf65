"""
Server entry point.

    uvicorn gerihealth.main:app --reload
"""

from pathlib import Path
import os

from dotenv import load_dotenv

# Load .env from the backend directory
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from .api.app import create_app  # noqa: E402

app = create_app()


def run():
    import uvicorn
    uvicorn.run(
        app,
        host=os.getenv("GERIHEALTH_HOST", "0.0.0.0"),
        port=int(os.getenv("GERIHEALTH_PORT", "8000"))
    )


if __name__ == "__main__":
    run()
