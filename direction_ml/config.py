# direction_ml/config.py

# Number of prior trading days that make up one feature window
WINDOW_SIZE = 5

# Feature columns (we keep them in one place so features, modeling + explain can share)
# Index 0 is the bias term and is never normalized.
FEATURE_COLUMNS = [
    "bias",
    "avg_price", "avg_volume",
    "price_change", "volume_change",
    "price_change_pct", "volume_change_pct",
    "price_volatility",
    "price_trend", "volume_trend",
]
N_FEATURES = len(FEATURE_COLUMNS)

# Training refuses to run below this many usable examples
MIN_TRAINING_EXAMPLES = 2

# Value substituted for NaN inputs and constant features
NEUTRAL_VALUE = 0.5

# Gradient descent defaults
DEFAULT_LEARNING_RATE = 0.01
DEFAULT_MAX_ITERATIONS = 5000
DEFAULT_CONVERGENCE_THRESHOLD = 1e-6
DEFAULT_L2_LAMBDA = 0.01

# Consecutive cost-plateau iterations before stopping early
STALL_PATIENCE = 5

# CSV column names (Nasdaq historical quotes export: Date, Close/Last, Volume, Open, High, Low)
CSV_DATE_COLUMNS = ["Date", "date"]
CSV_PRICE_COLUMNS = ["Close/Last", "Close", "close", "Price", "price"]
CSV_VOLUME_COLUMNS = ["Volume", "volume"]

# Thresholds (on the 0-100 probability scale, measured from 50) for confidence labels
CONFIDENCE_THRESHOLDS = {
    "strong": 25,
    "moderate": 10,
}
