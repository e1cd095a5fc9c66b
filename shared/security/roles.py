from enum import Enum


class Role(str, Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"
