#!/usr/bin/env python3
"""
Development server runner for ResuMatch.
Use this for local development and testing.
"""
import os
import sys


def main():
    # Add the project directory to the path
    project_dir = os.path.dirname(os.path.abspath(__file__))
    sys.path.insert(0, project_dir)

    # Import uvicorn
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Run: pip install uvicorn[standard]")
        sys.exit(1)

    # Check for the OCR toolchain
    try:
        import pytesseract
        print(f"Tesseract version: {pytesseract.get_tesseract_version()}")
    except Exception as e:
        print(f"Warning: Tesseract OCR not available ({e})")
        print("  Scanned PDFs will be analyzed from their embedded text only.")

    # Get configuration from environment
    host = os.getenv("RESUMATCH_HOST", "0.0.0.0")
    port = int(os.getenv("RESUMATCH_PORT", "8000"))
    debug = os.getenv("RESUMATCH_DEBUG", "true").lower() == "true"

    print(f"\nStarting ResuMatch")
    print(f"   Host: {host}")
    print(f"   Port: {port}")
    print(f"   Debug: {debug}")
    print(f"\nAPI Documentation: http://localhost:{port}/docs")
    print(f"ReDoc: http://localhost:{port}/redoc")
    print(f"Health Check: http://localhost:{port}/api/health\n")

    # Run the server
    uvicorn.run(
        "resumatch.main:app",
        host=host,
        port=port,
        reload=debug,
        log_level="debug" if debug else "info",
    )


if __name__ == "__main__":
    main()
