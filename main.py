"""
Main entry point for the chatbot backend.
"""
import logging

from config.env import DEBUG, HOST, PORT, LOG_LEVEL
from api.server import app, get_chat_session


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Restore the saved conversation before serving requests
    get_chat_session()

    print(f"Starting chatbot backend on {HOST}:{PORT} (debug={DEBUG})")
    app.run(host=HOST, port=PORT, debug=DEBUG)
