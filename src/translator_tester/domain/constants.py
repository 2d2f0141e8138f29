"""
Domain Constants: tester-wide constants.

Test kinds, run limits, fixture markers and the field names that the
record normalizer treats specially.
"""

# =============================================================================
# Test Kinds
# =============================================================================

TEST_TYPE_WEB = "web"
TEST_TYPE_IMPORT = "import"
TEST_TYPE_EXPORT = "export"
TEST_TYPE_SEARCH = "search"

TEST_TYPES = (TEST_TYPE_WEB, TEST_TYPE_IMPORT, TEST_TYPE_EXPORT, TEST_TYPE_SEARCH)

# Kinds whose input is a plain string; the rest take a structured query
STRING_INPUT_TYPES = (TEST_TYPE_WEB, TEST_TYPE_IMPORT)

# Placeholder for "more than one record, contents not enumerated"
MULTIPLE = "multiple"

# =============================================================================
# Run Limits
# =============================================================================

DEFAULT_DEFER_DELAY = 5.0  # seconds
TEST_RUN_TIMEOUT = 15.0  # seconds
MAX_SELECT_ITEMS = 3

DEFAULT_HTTP_TIMEOUT = 30.0  # seconds
DEFAULT_USER_AGENT = "translator-tester/0.1"

# =============================================================================
# Embedded Test Fixtures
# =============================================================================
# Test cases live in the translator source between these two markers:
#
#   /** BEGIN TEST CASES **/
#   var testCases = [ ... ];
#   /** END TEST CASES **/

TEST_CASES_BEGIN_MARKER = "/** BEGIN TEST CASES **/"
TEST_CASES_END_MARKER = "/** END TEST CASES **/"

# =============================================================================
# Translator Types (bitmask)
# =============================================================================

TRANSLATOR_TYPE_IMPORT = 1
TRANSLATOR_TYPE_EXPORT = 2
TRANSLATOR_TYPE_WEB = 4
TRANSLATOR_TYPE_SEARCH = 8

TRANSLATOR_TYPE_FLAGS = {
    TEST_TYPE_IMPORT: TRANSLATOR_TYPE_IMPORT,
    TEST_TYPE_EXPORT: TRANSLATOR_TYPE_EXPORT,
    TEST_TYPE_WEB: TRANSLATOR_TYPE_WEB,
    TEST_TYPE_SEARCH: TRANSLATOR_TYPE_SEARCH,
}

# =============================================================================
# Record Normalization
# =============================================================================

# Media type given to attachments that carried a live page handle
SNAPSHOT_MIME_TYPE = "text/html"

# Structural fields kept out of the item-field registry pass
STRUCTURAL_FIELDS = frozenset({
    "note",
    "notes",
    "itemID",
    "attachments",
    "tags",
    "seeAlso",
    "itemType",
    "creators",
    "complete",
})

# Attachment keys that are transient or not serializable
TRANSIENT_ATTACHMENT_FIELDS = ("url", "complete")

# Capture-time fields that vary between runs
NONDETERMINISTIC_FIELDS = ("accessDate",)
