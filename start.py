"""
Quick start script for local development.
Installs the package in editable mode and starts the API server.
"""
import subprocess
import sys


def main():
    """Installs dependencies and starts the server."""
    print("DebtFree - Debt Stress Analyzer\n")

    print("Installing dependencies...")
    try:
        subprocess.run(
            [sys.executable, "-m", "pip", "install", "-e", "."],
            check=True
        )
        print("Dependencies installed successfully!\n")
    except subprocess.CalledProcessError:
        print("Error installing dependencies. Attempting to continue...\n")

    print("Starting FastAPI server on port 8000...")
    print("Documentation: http://localhost:8000/docs")
    print("Sample ledger: http://localhost:8000/ledger/sample")
    print("Health check:  http://localhost:8000/health\n")

    try:
        subprocess.run(
            [sys.executable, "-m", "uvicorn", "debtfree.main:app", "--reload", "--host", "0.0.0.0", "--port", "8000"],
            check=True
        )
    except KeyboardInterrupt:
        print("\n\nServer stopped. Goodbye!")
    except subprocess.CalledProcessError as e:
        print(f"\nError starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
