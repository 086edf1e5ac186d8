# gst_engine/domain/constants.py
"""State codes, standard GST rates and the enums that drive return buckets."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

GST_STATE_CODES: dict[str, str] = {
    "01": "Jammu and Kashmir",
    "02": "Himachal Pradesh",
    "03": "Punjab",
    "04": "Chandigarh",
    "05": "Uttarakhand",
    "06": "Haryana",
    "07": "Delhi",
    "08": "Rajasthan",
    "09": "Uttar Pradesh",
    "10": "Bihar",
    "11": "Sikkim",
    "12": "Arunachal Pradesh",
    "13": "Nagaland",
    "14": "Manipur",
    "15": "Mizoram",
    "16": "Tripura",
    "17": "Meghalaya",
    "18": "Assam",
    "19": "West Bengal",
    "20": "Jharkhand",
    "21": "Odisha",
    "22": "Chhattisgarh",
    "23": "Madhya Pradesh",
    "24": "Gujarat",
    "25": "Daman and Diu",
    "26": "Dadra and Nagar Haveli",
    "27": "Maharashtra",
    "28": "Andhra Pradesh",
    "29": "Karnataka",
    "30": "Goa",
    "31": "Lakshadweep",
    "32": "Kerala",
    "33": "Tamil Nadu",
    "34": "Puducherry",
    "35": "Andaman and Nicobar Islands",
    "36": "Telangana",
    "37": "Andhra Pradesh (New)",
    "38": "Ladakh",
}

# Standard slabs
GST_RATES: dict[str, Decimal] = {
    "EXEMPT": Decimal("0"),
    "GST_5": Decimal("5"),
    "GST_12": Decimal("12"),
    "GST_18": Decimal("18"),
    "GST_28": Decimal("28"),
}

DEFAULT_GST_RATE = GST_RATES["GST_18"]
MAX_GST_RATE = Decimal("50")

# B2C invoices above this value (inter-state) are reported as B2CL
B2CL_THRESHOLD = Decimal("250000")


class GSTReturnType(str, Enum):
    GSTR1 = "GSTR1"
    GSTR3B = "GSTR3B"
    GSTR2A = "GSTR2A"
    GSTR2B = "GSTR2B"
    GSTR4 = "GSTR4"
    GSTR9 = "GSTR9"
    GSTR9C = "GSTR9C"


class GSTInvoiceType(str, Enum):
    TAX_INVOICE = "Tax Invoice"
    BILL_OF_SUPPLY = "Bill of Supply"
    CREDIT_NOTE = "Credit Note"
    DEBIT_NOTE = "Debit Note"
    EXPORT_INVOICE = "Export Invoice"
    SEZ_INVOICE = "SEZ Invoice"


class GSTTransactionType(str, Enum):
    """Mutually exclusive GSTR-1 categories for an outward document."""

    B2B = "B2B"
    B2C = "B2C"  # reported as B2CS
    B2CL = "B2CL"
    EXPORT = "EXP"
    NIL = "NIL"
