"""Application-wide constants."""

# Closed set of query topics, in display order
TOPICS = ("technical", "account", "hardware", "software", "hr", "other")

# Named relative date windows accepted by the search engine
DATE_FILTERS = ("today", "week", "month", "year")

# Sentinel values the UI sends for "no filter"
ALL_TOPICS = "all_topics"
ALL_EMPLOYEES = "all_employees"
ALL_TIME = "all_time"


def parse_topic(topic_input: str) -> str:
    """Normalise and validate a topic name.

    Accepts any casing and surrounding whitespace (``" HR "`` -> ``"hr"``).

    Args:
        topic_input: Raw topic string.

    Returns:
        The lower-case topic name.

    Raises:
        ValueError: If the topic is empty or not in ``TOPICS``.
    """
    topic = topic_input.strip().lower()

    if not topic:
        raise ValueError(f"Empty topic. Supported: {', '.join(TOPICS)}")

    if topic not in TOPICS:
        raise ValueError(
            f"Unsupported topic: {topic_input.strip()}. "
            f"Supported: {', '.join(TOPICS)}"
        )

    return topic

# Storage layout
DEFAULT_DATA_DIR = "./data"
USERS_FILENAME = "users.json"
QUERIES_FILENAME = "queries.json"

# Sessions
DEFAULT_SESSION_TTL_HOURS = 24
DEFAULT_SESSION_COOKIE_NAME = "kb_session"
SESSION_TOKEN_BYTES = 32

# Authentication messages (never reveal which credential was wrong)
INVALID_CREDENTIALS_MESSAGE = "Invalid employee ID or password"
UNAUTHENTICATED_MESSAGE = "Unauthorized"
