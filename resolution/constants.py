import os

# Separates the attribute names of a path such as "person.address.city".
ATTRIBUTE_SEPARATOR: str = os.getenv("TEMPLATE_ATTRIBUTE_SEPARATOR") or "."

# Locale handed to localized values when rendering them as text.
DEFAULT_LOCALE: str = os.getenv("TEMPLATE_LOCALE") or "en_US"
