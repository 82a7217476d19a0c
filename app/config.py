import os

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

# OpenAI (read by langchain_openai from the environment)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")

# AI subtask generation
SUBTASK_MODEL = os.getenv("SUBTASK_MODEL", "gpt-4o-mini")
SUBTASK_SUGGESTION_LIMIT = int(os.getenv("SUBTASK_SUGGESTION_LIMIT", "5"))

# Embeddings / smart search
EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "text-embedding-3-small")
EMBEDDING_DIMENSIONS = int(os.getenv("EMBEDDING_DIMENSIONS", "384"))  # matches vector(384) column
SEARCH_MATCH_THRESHOLD = float(os.getenv("SEARCH_MATCH_THRESHOLD", "0.3"))
SEARCH_MATCH_COUNT = int(os.getenv("SEARCH_MATCH_COUNT", "10"))

# Serverless endpoints as seen by the view layer
FUNCTIONS_BASE_URL = os.getenv("FUNCTIONS_BASE_URL", "http://localhost:8000/functions/v1")
FUNCTIONS_TIMEOUT_SECONDS = float(os.getenv("FUNCTIONS_TIMEOUT_SECONDS", "30"))

# Storage
PROFILE_PICTURE_BUCKET = os.getenv("PROFILE_PICTURE_BUCKET", "profile-pictures")
PROFILE_PICTURE_MAX_BYTES = int(os.getenv("PROFILE_PICTURE_MAX_BYTES", str(5 * 1024 * 1024)))

# HTTP
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
