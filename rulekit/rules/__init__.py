"""
Validation Rules Package

Contains the built-in rule catalog:
- base: ValidationRule contract and argument coercion helpers
- type_rules: type and character-class rules
- value_rules: range, length, equality, membership, presence and regex rules
- format_rules: email, URL, domain, date and phone number rules
"""

from .base import ValidationRule
from .format_rules import (
    DateValidationRule,
    DomainNameValidationRule,
    EmailValidationRule,
    PhoneNumberValidationRule,
    URLValidationRule,
)
from .type_rules import (
    AlphaNumericValidationRule,
    AlphaValidationRule,
    ArrayValidationRule,
    AsciiValidationRule,
    IntegerValidationRule,
    JsonValidationRule,
    NumberValidationRule,
    NumericValidationRule,
    StringValidationRule,
)
from .value_rules import (
    BetweenValidationRule,
    EmptyValidationRule,
    EnumValidationRule,
    EqualToValidationRule,
    InListValidationRule,
    MaxLengthValidationRule,
    MaxValidationRule,
    MinLengthValidationRule,
    MinValidationRule,
    NotEmptyValidationRule,
    NotEqualToValidationRule,
    NotInListValidationRule,
    RegexValidationRule,
    RequiredValidationRule,
)

BUILT_IN_RULES = {
    'alpha': AlphaValidationRule,
    'alphaNum': AlphaNumericValidationRule,
    'between': BetweenValidationRule,
    'domain': DomainNameValidationRule,
    'email': EmailValidationRule,
    'equalTo': EqualToValidationRule,
    'inList': InListValidationRule,
    'integer': IntegerValidationRule,
    'maxLength': MaxLengthValidationRule,
    'max': MaxValidationRule,
    'minLength': MinLengthValidationRule,
    'min': MinValidationRule,
    'notEqualTo': NotEqualToValidationRule,
    'notInList': NotInListValidationRule,
    'numeric': NumericValidationRule,
    'regex': RegexValidationRule,
    'required': RequiredValidationRule,
    'string': StringValidationRule,
    'url': URLValidationRule,
    # Shipped rules that are also addressable from a spec string
    'array': ArrayValidationRule,
    'ascii': AsciiValidationRule,
    'date': DateValidationRule,
    'empty': EmptyValidationRule,
    'json': JsonValidationRule,
    'notEmpty': NotEmptyValidationRule,
    'number': NumberValidationRule,
    'phone': PhoneNumberValidationRule,
}

__all__ = [
    'BUILT_IN_RULES',
    'ValidationRule',
    'AlphaNumericValidationRule',
    'AlphaValidationRule',
    'ArrayValidationRule',
    'AsciiValidationRule',
    'BetweenValidationRule',
    'DateValidationRule',
    'DomainNameValidationRule',
    'EmailValidationRule',
    'EmptyValidationRule',
    'EnumValidationRule',
    'EqualToValidationRule',
    'InListValidationRule',
    'IntegerValidationRule',
    'JsonValidationRule',
    'MaxLengthValidationRule',
    'MaxValidationRule',
    'MinLengthValidationRule',
    'MinValidationRule',
    'NotEmptyValidationRule',
    'NotEqualToValidationRule',
    'NotInListValidationRule',
    'NumberValidationRule',
    'NumericValidationRule',
    'PhoneNumberValidationRule',
    'RegexValidationRule',
    'RequiredValidationRule',
    'StringValidationRule',
    'URLValidationRule',
]
