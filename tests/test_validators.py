from decimal import Decimal

import pytest

from utils.exceptions import InvalidAmountException, InvalidRefillAmountException, ValidationException
from utils.helpers import NumberUtils, StringUtils
from utils.validators import ATMValidator


@pytest.mark.parametrize("amount,expected", [(100, 100), (2300, 2300), (Decimal('500'), 500), (700.0, 700)])
def test_valid_withdrawal_amounts(amount, expected):
    assert ATMValidator.validate_withdrawal_amount(amount) == expected


@pytest.mark.parametrize("amount", [
    0, -200, 50, 199, Decimal('100.50'), None, True,
    float('inf'), float('-inf'), float('nan'),
    Decimal('NaN'), Decimal('sNaN'), Decimal('Infinity'),
])
def test_invalid_withdrawal_amounts(amount):
    with pytest.raises(InvalidAmountException):
        ATMValidator.validate_withdrawal_amount(amount)


def test_account_number_and_pin():
    assert ATMValidator.validate_account_number(' 1001 ') == 1001
    assert ATMValidator.validate_pin(1234) == '1234'
    with pytest.raises(ValidationException):
        ATMValidator.validate_account_number('10a1')
    with pytest.raises(ValidationException):
        ATMValidator.validate_pin('12')
    with pytest.raises(ValidationException):
        ATMValidator.validate_pin('')


def test_refill_validation():
    assert ATMValidator.validate_refill({2000: 0, 100: 4}) == {2000: 0, 100: 4}
    with pytest.raises(InvalidRefillAmountException):
        ATMValidator.validate_refill({100: -1})
    with pytest.raises(InvalidRefillAmountException):
        ATMValidator.validate_refill({50: 1})
    with pytest.raises(InvalidRefillAmountException):
        ATMValidator.validate_refill({100: 1.5})


def test_currency_helpers():
    assert NumberUtils.round_currency('15000.505') == Decimal('15000.51')
    assert StringUtils.format_currency(Decimal('12700')) == '₹12,700.00'
    assert StringUtils.mask_account_number(1001) == '**01'
