EMPLOYMENT_TYPES = ("full-time", "part-time", "contract", "internship")

# Location value meaning "no location restriction"
WORLDWIDE = "worldwide"

BENEFITS = (
    "401k",
    "distributed",
    "async",
    "vision",
    "dental",
    "medical",
    "unlimited_vacation",
    "pto",
    "quiet_office",
    "learning_budget",
    "free_meals",
    "gym",
    "home_office",
    "parental_leave",
    "equity",
)
