"""
Start the glossary server for local development
"""
import sys

import uvicorn

if __name__ == "__main__":
    print("Starting Tech Glossary Server...")
    print(f"Python: {sys.version}")

    try:
        uvicorn.run(
            "glossary.main:app",
            host="127.0.0.1",
            port=8000,
            reload=True,
            log_level="info"
        )
    except KeyboardInterrupt:
        print("\nServer stopped by user")
