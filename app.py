"""Production entry point for TeamCal using uvicorn"""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

if __name__ == "__main__":
    PORT = int(os.getenv("PORT", "4000"))
    HOST = os.getenv("HOST", "127.0.0.1")
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()

    print(f"Starting TeamCal in {ENVIRONMENT} mode...")
    print(f"Host: {HOST}, Port: {PORT}")

    # One worker: the JSON document store is single-process only
    uvicorn.run(
        "web.main:app",
        host=HOST,
        port=PORT,
        workers=1,
        log_level="info",
        access_log=True,
    )
