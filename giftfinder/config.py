import os
from dotenv import load_dotenv

load_dotenv()

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "").strip()
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash").strip()
GEMINI_API_BASE = os.getenv(
    "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"
).strip().rstrip("/")

AMAZON_ASSOCIATE_TAG = os.getenv("AMAZON_ASSOCIATE_TAG", "realstory-20").strip()

MAX_GIFT_IDEAS = int(os.getenv("MAX_GIFT_IDEAS", "5"))
MIN_GIFT_IDEAS = int(os.getenv("MIN_GIFT_IDEAS", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip()
LOG_DIR = os.getenv("GIFTFINDER_LOG_DIR", "").strip()

OCCASIONS = [
    "Anniversary", "Baby Shower", "Birthday", "Father's Day", "Graduation", "Holiday",
    "Housewarming", "Just Because", "Mother's Day", "Retirement", "Thank You", "Valentine's",
]
RELATIONSHIPS = ["child", "colleague", "friend", "grandparent", "other", "parent", "partner", "sibling"]
GENDERS = ["He", "She", "They"]
