# Configuration for the stock-taking scripts

# Product catalog (barcode, name, publisher, stock count, product id)
DATABASE_FILE = "database.csv"

# Selectable locations, one per line
LOCATIONS_FILE = "locations.txt"

# Session logs are written here, one file per day/operator/location
LOG_DIR = "log"

# Merged logs and reconciliation reports
REPORT_DIR = "kimutatások"

# Also write the reconciliation report as Excel
REPORT_EXCEL = True

# Log level of the scripts
LOG_LEVEL = "WARNING"
