# config.py
import os

# Base directory where the application is installed
# Use environment variable if provided, otherwise use relative path
BASE_DIR = os.environ.get('OBOETE_BASE_DIR', os.path.dirname(os.path.abspath(__file__)))

APP_TITLE = "Oboete"
APP_ID = "dev.mariinkys.Oboete"
REPOSITORY = "https://github.com/mariinkys/oboete"

# Database configuration
# Defaults target the per-user SQL Server LocalDB instance
DB_CONFIG = {
    'server': os.environ.get('OBOETE_DB_SERVER', '(localdb)\\MSSQLLocalDB'),
    'database': os.environ.get('OBOETE_DB_NAME', 'Oboete'),
    'trusted_connection': os.environ.get('OBOETE_DB_TRUSTED', 'yes'),
    # Examples: 'ODBC Driver 18 for SQL Server', 'ODBC Driver 17 for SQL Server'
    'driver': os.environ.get('OBOETE_DB_DRIVER', 'ODBC Driver 17 for SQL Server'),
    # Set OBOETE_DB_ENCRYPT to 'yes'/'no' to force Encrypt parameter
    # Set OBOETE_DB_TRUST_CERT to 'yes'/'no' to force TrustServerCertificate
    'encrypt': os.environ.get('OBOETE_DB_ENCRYPT', ''),
    'trust_server_certificate': os.environ.get('OBOETE_DB_TRUST_CERT', ''),
}

# A full connection string here wins over DB_CONFIG
DB_CONN_STR = os.environ.get('OBOETE_DB_CONN_STR', '')

# Logging
LOG_DIR = os.environ.get('OBOETE_LOG_DIR', os.path.join(BASE_DIR, "logs"))
LOG_FILE = os.environ.get('OBOETE_LOG_FILE', os.path.join(LOG_DIR, "oboete.log"))
LOG_LEVEL = os.environ.get('OBOETE_LOG_LEVEL', 'INFO').upper()

# Study sets shown per row on the study sets grid
STUDYSETS_PER_ROW = 5

# How often (ms) the UI loop picks up finished background tasks
TASK_POLL_MS = int(os.environ.get('OBOETE_TASK_POLL_MS', '50'))

# Words per minute for the read-aloud button
SPEECH_RATE = int(os.environ.get('OBOETE_SPEECH_RATE', '150'))

# UI Configuration
UI_CONFIG = {
    'window_width': 960,
    'window_height': 640,
    'nav_width': 180,
    'drawer_width': 300,

    # Colors
    'bg_color': "#1e1e1e",
    'nav_bg_color': "#000000",
    'drawer_bg_color': "#2a2a2a",
    'text_color': "white",
    'accent_color': "#2196F3",
    'destructive_color': "#F44336",
    'standard_color': "#607D8B",
    'bad_color': "#F44336",
    'ok_color': "#FFC107",
    'good_color': "#4CAF50",

    # Fonts
    'font_family': "Trebuchet MS",
    'title_font_size': 14,
    'normal_font_size': 10,
    'small_font_size': 8,
    'card_font_size': 24,
}


# Helper functions
def get_connection_string(database=None):
    """Connection string for the app database, or for ``database`` when given."""
    if DB_CONN_STR and database is None:
        return DB_CONN_STR
    driver = DB_CONFIG.get('driver', 'ODBC Driver 17 for SQL Server')
    parts = [
        "DRIVER={" + driver + "};",
        f"SERVER={DB_CONFIG['server']};",
        f"DATABASE={database or DB_CONFIG['database']};",
        f"Trusted_Connection={DB_CONFIG['trusted_connection']};",
    ]
    # Append optional security flags if provided (empty values are ignored)
    enc = (DB_CONFIG.get('encrypt') or '').strip()
    if enc:
        parts.append(f"Encrypt={enc};")
    tsc = (DB_CONFIG.get('trust_server_certificate') or '').strip()
    if tsc:
        parts.append(f"TrustServerCertificate={tsc};")
    return "".join(parts)

def get_font(font_type):
    """Get font tuple based on predefined settings"""
    if font_type == 'title':
        return (UI_CONFIG['font_family'], UI_CONFIG['title_font_size'], 'bold')
    elif font_type == 'normal':
        return (UI_CONFIG['font_family'], UI_CONFIG['normal_font_size'])
    elif font_type == 'small':
        return (UI_CONFIG['font_family'], UI_CONFIG['small_font_size'])
    elif font_type == 'card':
        return (UI_CONFIG['font_family'], UI_CONFIG['card_font_size'], 'bold')
    else:
        return (UI_CONFIG['font_family'], UI_CONFIG['normal_font_size'])
