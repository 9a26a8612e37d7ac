"""Command-line entrypoint that serves the API with uvicorn."""

import os

import uvicorn


def main() -> None:
    """Run the ASGI app on HOST/PORT from the environment."""
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    print(f"Virtual Food Photographer listening on http://{host}:{port}")
    uvicorn.run("food_photographer.api.asgi:app", host=host, port=port)


if __name__ == "__main__":
    main()
