"""Fixed classification taxonomies shared by the prompt and the sanitizer.

The labels are the exact strings written to the ledger, so they are kept in
Japanese. Any value the model returns outside these sets is replaced by the
default for its field.
"""

# Payment methods
PAYMENT_CREDIT_CARD = "クレカ"
PAYMENT_CASH = "現金"
PAYMENT_DEBIT = "デビット"
PAYMENT_ELECTRONIC_MONEY = "電子マネー"
PAYMENT_QR = "QR決済"
PAYMENT_BANK_TRANSFER = "銀行振込"
PAYMENT_OTHER = "その他"

PAYMENT_METHODS: tuple[str, ...] = (
    PAYMENT_CREDIT_CARD,
    PAYMENT_CASH,
    PAYMENT_DEBIT,
    PAYMENT_ELECTRONIC_MONEY,
    PAYMENT_QR,
    PAYMENT_BANK_TRANSFER,
    PAYMENT_OTHER,
)

DEFAULT_PAYMENT_METHOD = PAYMENT_CREDIT_CARD

# Expense (account) categories
CATEGORY_TRANSPORTATION = "交通費"
CATEGORY_COMMUNICATIONS = "通信費"
CATEGORY_SUPPLIES = "消耗品"
CATEGORY_ENTERTAINMENT = "接待交際費"
CATEGORY_ADVERTISING = "広告宣伝費"
CATEGORY_EMPLOYEE_WELFARE = "福利厚生費"
CATEGORY_UTILITIES = "水道光熱費"
CATEGORY_RENT = "地代家賃"
CATEGORY_REPAIRS = "修繕費"
CATEGORY_MISCELLANEOUS = "雑費"

ACCOUNT_CATEGORIES: tuple[str, ...] = (
    CATEGORY_TRANSPORTATION,
    CATEGORY_COMMUNICATIONS,
    CATEGORY_SUPPLIES,
    CATEGORY_ENTERTAINMENT,
    CATEGORY_ADVERTISING,
    CATEGORY_EMPLOYEE_WELFARE,
    CATEGORY_UTILITIES,
    CATEGORY_RENT,
    CATEGORY_REPAIRS,
    CATEGORY_MISCELLANEOUS,
)

DEFAULT_ACCOUNT_CATEGORY = CATEGORY_MISCELLANEOUS

# Used when the model returns no product or service name
DEFAULT_ITEM_NAME = "サービス"

# Limits applied to model output
MAX_EXTRACTED_ITEMS = 50
MAX_ALLOWED_AMOUNT = 100_000_000
