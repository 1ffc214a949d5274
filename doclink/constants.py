DEFAULT_RECORD_TYPES = (
    {"key_prefix": "acc", "name": "account", "label": "Account", "plural_label": "Accounts"},
    {"key_prefix": "con", "name": "contact", "label": "Contact", "plural_label": "Contacts"},
    {"key_prefix": "opp", "name": "opportunity", "label": "Opportunity", "plural_label": "Opportunities"},
    {"key_prefix": "cas", "name": "case", "label": "Case", "plural_label": "Cases"},
)

LIKE_ESCAPE_CHAR = "\\"

EMPTY_SELECTION_MESSAGE = "Select at least one record to attach files to"

MAX_SQL_INTEGER = 2**63 - 1
