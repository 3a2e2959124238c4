#!/usr/bin/env python3
"""
Run script for the NETbilling gateway backend
"""

import os
import sys
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def check_configuration():
    """Check if configuration is properly set up"""
    required_vars = [
        'NETBILLING_ACCOUNT_ID',
    ]

    missing_vars = []
    for var in required_vars:
        value = os.getenv(var)
        if not value or value.startswith('your_'):
            missing_vars.append(var)

    if missing_vars:
        print("❌ Configuration Error:")
        print(f"Missing or invalid configuration: {', '.join(missing_vars)}")
        print("\nPlease update your .env file with proper values:")
        print("1. Set NETBILLING_ACCOUNT_ID to your NETbilling account ID")
        print("2. Optionally set NETBILLING_SITE_TAG and NETBILLING_ENV (test | production)")
        return False

    return True


def main():
    """Main function to start the server"""
    print("🚀 Starting NETbilling Gateway Backend")
    print("=" * 60)

    if not check_configuration():
        sys.exit(1)

    from app import app
    from config import Config

    print(f"🌐 Server will run on: http://{Config.HOST}:{Config.PORT}")
    print(f"🔧 Debug mode: {'Enabled' if Config.DEBUG else 'Disabled'}")
    print(f"💳 NETbilling Environment: {Config.NETBILLING_ENV}")
    print("\n📋 Available endpoints:")
    print("  POST /api/netbilling/charge - Credit card sale")
    print("  POST /api/netbilling/authorize - Credit card authorization")
    print("  POST /api/netbilling/capture - Capture an authorization")
    print("  POST /api/netbilling/tokenize - Store a card or bank account")
    print("  GET  /api/health/ready - Readiness check")
    print("=" * 60)

    app.run(
        host=Config.HOST,
        port=Config.PORT,
        debug=Config.DEBUG
    )


if __name__ == "__main__":
    main()
