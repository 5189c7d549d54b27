#!/usr/bin/env python3
"""
Startup script for the Inventory Form backend
"""
import os
import sys
from pathlib import Path

# Get the directory where this script is located
backend_dir = Path(__file__).parent.absolute()

# Change to backend directory so relative data/export dirs land here
os.chdir(backend_dir)
sys.path.insert(0, str(backend_dir))


def main():
    app_py = backend_dir / "app.py"
    if not app_py.exists():
        print(f"ERROR: app.py not found at {app_py}")
        sys.exit(1)

    print("Starting backend server...")
    try:
        import uvicorn

        host = os.getenv("HOST", "0.0.0.0")
        port = int(os.getenv("PORT", "8000"))
        print(f"🚀 Starting server on http://{host}:{port}")

        uvicorn.run(
            "app:app",
            host=host,
            port=port,
            reload=False,
            log_level="info"
        )
    except ImportError as e:
        print(f"❌ Import error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
