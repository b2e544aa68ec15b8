#!/usr/bin/env python3
"""
Startup script for the ACM Claim Calculator
"""
import subprocess
import sys
from pathlib import Path


def create_env_file():
    """Create .env file if it doesn't exist"""
    env_path = Path(".env")
    if not env_path.exists():
        print("📝 Creating .env file...")

        env_content = """# Application Configuration
APP_NAME=ACM Claim Calculator
APP_VERSION=1.0.0
DEBUG=true
LOG_LEVEL=INFO

# API Configuration
API_PREFIX=
CORS_ORIGINS=http://localhost:3000,http://localhost:8080

# ACM snapshot source (file wins over URL; built-in edition when both are empty)
ACM_SNAPSHOT_PATH=
ACM_SNAPSHOT_URL=
ACM_FETCH_TIMEOUT=30
"""

        with open(env_path, 'w') as f:
            f.write(env_content)

        print("✅ .env file created successfully!")
    else:
        print("✅ .env file already exists")


def check_dependencies():
    """Check if required dependencies are installed"""
    print("🔍 Checking dependencies...")

    try:
        import fastapi
        import uvicorn
        import httpx
        import pydantic_settings
        print("✅ All Python dependencies are installed")
        return True
    except ImportError as e:
        print(f"❌ Missing dependency: {e}")
        print("📦 Please install dependencies using: pip install -e .[test]")
        return False


def run_tests():
    """Run the test suite"""
    print("🧪 Running tests...")

    result = subprocess.run([sys.executable, '-m', 'pytest', '-q'], capture_output=True, text=True)
    if result.returncode == 0:
        print("✅ Tests passed successfully")
        return True
    print(f"❌ Tests failed:\n{result.stdout[-2000:]}")
    return False


def start_application():
    """Start the FastAPI application"""
    print("🚀 Starting the application...")

    try:
        subprocess.run([
            sys.executable, '-m', 'uvicorn',
            'acm_calculator.main:app',
            '--host', '0.0.0.0',
            '--port', '8000',
            '--reload'
        ])
    except KeyboardInterrupt:
        print("\n👋 Application stopped by user")


def main():
    """Main startup function"""
    print("🧮 ACM Claim Calculator")
    print("=" * 50)

    if not Path("acm_calculator").exists():
        print("❌ Please run this script from the repository root")
        sys.exit(1)

    create_env_file()

    if not check_dependencies():
        sys.exit(1)

    if not run_tests():
        print("\n⚠️  Some tests failed. Estimates may not be correct.")

    print("\n📚 Visit http://localhost:8000/docs for API documentation")

    response = input("\n🚀 Start the application now? (y/n): ").lower().strip()
    if response in ['y', 'yes']:
        start_application()
    else:
        print("\n💡 To start the application later, run:")
        print("   uvicorn acm_calculator.main:app --reload")


if __name__ == "__main__":
    main()
