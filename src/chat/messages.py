"""User-facing strings shown in the conversation and in notifications."""

ERROR_AUTHENTICATION = "Authentication failed. Please reload the page."
ERROR_CREATE_THREAD = "The conversation could not be started. Please try again."
ERROR_FETCH_BOT_RESPONSE = "The answer could not be loaded."
ERROR_FETCH_EXAMPLE_QUESTIONS = "Example questions could not be loaded."
ERROR_UNKNOWN = "Unknown error occurred."
EVALUATION_THANKS = "Thank you for your feedback!"
EVALUATION_ERROR = "Your feedback could not be sent."


def error_text(detail: str) -> str:
    """Format the text of a bot-authored error message."""
    return f"Error: {detail}" if detail else ERROR_UNKNOWN
