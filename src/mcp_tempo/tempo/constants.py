"""Constants specific to the Jira and Tempo REST endpoints."""

# Jira platform
MYSELF_PATH = "rest/api/2/myself"
ISSUE_PATH = "rest/api/2/issue"

# Tempo Timesheets 4
WORKLOGS_PATH = "rest/tempo-timesheets/4/worklogs/"
WORKLOG_SEARCH_PATH = "rest/tempo-timesheets/4/worklogs/search"

# Tempo Core 2
SCHEDULE_SEARCH_PATH = "rest/tempo-core/2/user/schedule/search"

# Upper bound of entries accepted by one bulk creation
MAX_BULK_ENTRIES = 100

# Remote calls in flight at once per client, and pooled connections per host
MAX_CONCURRENT_REQUESTS = 10
