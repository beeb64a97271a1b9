import re
import unicodedata


def normalize(text: str) -> str:
    text = (text or "").lower()
    text = unicodedata.normalize("NFKD", text)
    text = "".join(char for char in text if not unicodedata.combining(char))
    text = re.sub(r"[-_]", " ", text)
    text = re.sub(r"[^\w\s]", " ", text)
    text = re.sub(r"\s+", " ", text).strip()
    return text


def contains_phrase(normalized_text: str, phrase: str) -> bool:
    """Casa a frase como palavra inteira ('oi' não casa com 'noite')."""
    target = normalize(phrase)
    if not target or not normalized_text:
        return False
    return re.search(rf"\b{re.escape(target)}\b", normalized_text) is not None
