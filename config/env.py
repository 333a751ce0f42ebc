"""Environment variables configuration."""
import os
from dotenv import load_dotenv

load_dotenv()

# Azure OpenAI Configuration
AZURE_OPENAI_KEY = os.getenv("AZURE_OPENAI_KEY") or os.getenv("AZURE_OPENAI_API_KEY")
AZURE_OPENAI_ENDPOINT = os.getenv("AZURE_OPENAI_ENDPOINT")
AZURE_OPENAI_API_VERSION = os.getenv("AZURE_OPENAI_API_VERSION", "2024-02-15-preview")
AZURE_OPENAI_DEPLOYMENT = os.getenv("AZURE_OPENAI_DEPLOYMENT", "gpt-4o")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "60"))

# Flow selection
CHAT_FLOW = os.getenv("CHAT_FLOW", "augment").strip().lower()
AUGMENTATION_MODE = os.getenv("AUGMENTATION_MODE", "tool").strip().lower()

# Chat history storage
CHAT_HISTORY_PATH = os.path.expanduser(
    os.getenv("CHAT_HISTORY_PATH", os.path.join("~", ".chatbot", "history.json"))
)
CHAT_HISTORY_KEY = os.getenv("CHAT_HISTORY_KEY", "lokesh_chatbot_history")

# Server Configuration
DEBUG = os.getenv("DEBUG", "False").lower() == "true"
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", 5100))
FRONTEND_ORIGIN = os.getenv("FRONTEND_ORIGIN", "*")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
