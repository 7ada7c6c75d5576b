"""
Canonical state and union territory records seeded into the store at startup,
plus the neighbour map used to rank outbreaks by proximity.
"""

INDIAN_STATES = [
    {"id": 1, "name": "Andhra Pradesh", "code": "AP", "region": "South", "is_union_territory": False},
    {"id": 2, "name": "Arunachal Pradesh", "code": "AR", "region": "North East", "is_union_territory": False},
    {"id": 3, "name": "Assam", "code": "AS", "region": "North East", "is_union_territory": False},
    {"id": 4, "name": "Bihar", "code": "BR", "region": "East", "is_union_territory": False},
    {"id": 5, "name": "Chhattisgarh", "code": "CG", "region": "Central", "is_union_territory": False},
    {"id": 6, "name": "Goa", "code": "GA", "region": "West", "is_union_territory": False},
    {"id": 7, "name": "Gujarat", "code": "GJ", "region": "West", "is_union_territory": False},
    {"id": 8, "name": "Haryana", "code": "HR", "region": "North", "is_union_territory": False},
    {"id": 9, "name": "Himachal Pradesh", "code": "HP", "region": "North", "is_union_territory": False},
    {"id": 10, "name": "Jharkhand", "code": "JH", "region": "East", "is_union_territory": False},
    {"id": 11, "name": "Karnataka", "code": "KA", "region": "South", "is_union_territory": False},
    {"id": 12, "name": "Kerala", "code": "KL", "region": "South", "is_union_territory": False},
    {"id": 13, "name": "Madhya Pradesh", "code": "MP", "region": "Central", "is_union_territory": False},
    {"id": 14, "name": "Maharashtra", "code": "MH", "region": "West", "is_union_territory": False},
    {"id": 15, "name": "Manipur", "code": "MN", "region": "North East", "is_union_territory": False},
    {"id": 16, "name": "Meghalaya", "code": "ML", "region": "North East", "is_union_territory": False},
    {"id": 17, "name": "Mizoram", "code": "MZ", "region": "North East", "is_union_territory": False},
    {"id": 18, "name": "Nagaland", "code": "NL", "region": "North East", "is_union_territory": False},
    {"id": 19, "name": "Odisha", "code": "OD", "region": "East", "is_union_territory": False},
    {"id": 20, "name": "Punjab", "code": "PB", "region": "North", "is_union_territory": False},
    {"id": 21, "name": "Rajasthan", "code": "RJ", "region": "North", "is_union_territory": False},
    {"id": 22, "name": "Sikkim", "code": "SK", "region": "North East", "is_union_territory": False},
    {"id": 23, "name": "Tamil Nadu", "code": "TN", "region": "South", "is_union_territory": False},
    {"id": 24, "name": "Telangana", "code": "TS", "region": "South", "is_union_territory": False},
    {"id": 25, "name": "Tripura", "code": "TR", "region": "North East", "is_union_territory": False},
    {"id": 26, "name": "Uttar Pradesh", "code": "UP", "region": "North", "is_union_territory": False},
    {"id": 27, "name": "Uttarakhand", "code": "UK", "region": "North", "is_union_territory": False},
    {"id": 28, "name": "West Bengal", "code": "WB", "region": "East", "is_union_territory": False},
    {"id": 29, "name": "Andaman and Nicobar Islands", "code": "AN", "region": "South", "is_union_territory": True},
    {"id": 30, "name": "Chandigarh", "code": "CH", "region": "North", "is_union_territory": True},
    {"id": 31, "name": "Dadra and Nagar Haveli and Daman and Diu", "code": "DH", "region": "West", "is_union_territory": True},
    {"id": 32, "name": "Delhi", "code": "DL", "region": "North", "is_union_territory": True},
    {"id": 33, "name": "Jammu and Kashmir", "code": "JK", "region": "North", "is_union_territory": True},
    {"id": 34, "name": "Ladakh", "code": "LA", "region": "North", "is_union_territory": True},
    {"id": 35, "name": "Lakshadweep", "code": "LD", "region": "South", "is_union_territory": True},
    {"id": 36, "name": "Puducherry", "code": "PY", "region": "South", "is_union_territory": True},
]

# Lower-cased names
NEARBY_STATES = {
    "andhra pradesh": ["telangana", "karnataka", "tamil nadu", "odisha"],
    "telangana": ["andhra pradesh", "karnataka", "maharashtra", "odisha"],
    "karnataka": ["andhra pradesh", "telangana", "tamil nadu", "kerala", "maharashtra", "goa"],
    "tamil nadu": ["andhra pradesh", "karnataka", "kerala", "puducherry"],
    "kerala": ["tamil nadu", "karnataka"],
    "maharashtra": ["karnataka", "telangana", "gujarat", "madhya pradesh", "goa"],
    "gujarat": ["maharashtra", "rajasthan", "madhya pradesh"],
    "rajasthan": ["gujarat", "haryana", "punjab", "uttar pradesh", "madhya pradesh"],
    "uttar pradesh": ["delhi", "haryana", "rajasthan", "madhya pradesh", "bihar"],
    "bihar": ["uttar pradesh", "jharkhand", "west bengal"],
    "west bengal": ["bihar", "jharkhand", "odisha", "sikkim"],
    "odisha": ["west bengal", "jharkhand", "andhra pradesh", "telangana"],
    "punjab": ["haryana", "himachal pradesh", "rajasthan"],
    "haryana": ["punjab", "delhi", "uttar pradesh", "rajasthan"],
    "delhi": ["haryana", "uttar pradesh"],
}


def normalize_name(name):
    return " ".join((name or "").split()).lower()
