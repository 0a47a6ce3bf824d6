"""Configuration management for the PDF Study Assistant backend."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# API Keys
GROQ_API_KEY = os.getenv("GROQ_API_KEY")

# Server Configuration
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")  # "text" or "json"

# CORS Configuration
CORS_ORIGINS = os.getenv(
    "CORS_ORIGINS",
    "http://localhost:5173,http://localhost:3000"
).split(",")

# Model Configuration
GENERATION_MODEL = os.getenv("GENERATION_MODEL", "llama-3.1-8b-instant")
GENERATION_MAX_TOKENS = int(os.getenv("GENERATION_MAX_TOKENS", "1024"))

# Chunking Configuration
CHUNK_SIZE = 500  # words
CHUNK_OVERLAP = 50  # words

# Retrieval Configuration
MAX_RELEVANT_CHUNKS = 3

# Study material defaults
FLASHCARD_COUNT = 10
QUIZ_QUESTION_COUNT = 5

# Prompt text limits (characters)
FLASHCARD_TEXT_LIMIT = 15000
QUIZ_TEXT_LIMIT = 15000
SUMMARY_TEXT_LIMIT = 20000
EXPLAIN_CONTEXT_LIMIT = 10000
