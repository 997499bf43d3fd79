"""
Validation Constants for Term Data and View Queries.

This module contains the fixed value sets used when validating request bodies,
coercing LLM output and filtering the table / cloud views.
"""

CATEGORY_RESPONSIBILITIES = "responsibilities"
CATEGORY_QUALIFICATIONS = "qualifications"

# Valid term categories
VALID_CATEGORIES = {CATEGORY_RESPONSIBILITIES, CATEGORY_QUALIFICATIONS}

# Valid category filters for the table and cloud views
CATEGORY_FILTER_ALL = "all"
VALID_CATEGORY_FILTERS = {CATEGORY_FILTER_ALL} | VALID_CATEGORIES

# Valid role filter sentinel for the cloud view
ROLE_FILTER_ALL = "all"

# Valid sort orders for the table view
VALID_SORT_ORDERS = {"asc", "desc"}

# Valid cloud sizing variants
VALID_CLOUD_VARIANTS = {"fixed", "responsive"}

# Valid autocomplete fields (keys of a term source)
VALID_SUGGESTION_FIELDS = {"company", "role"}

# Valid LLM providers
PROVIDER_GROQ = "groq"
PROVIDER_PERPLEXITY = "perplexity"
VALID_PROVIDERS = {PROVIDER_GROQ, PROVIDER_PERPLEXITY}

# Job boards the research query is scoped to
JOB_BOARD_SITES = ["linkedin.com", "indeed.com", "glassdoor.com"]
