"""Tests for the User aggregate: registration, deposits, resets, debits, closing."""

import pytest
from marketplace.errors import InsufficientFunds
from marketplace.user.events import (
    BalanceDebited,
    DepositReset,
    FundsDeposited,
    UserClosed,
    UserRegistered,
)
from marketplace.user.user import User, UserRole, UserStatus
from protean.exceptions import ValidationError


def _make_buyer(balance=0):
    user = User.register(username="alice")
    if balance:
        user.deposit(balance)
    user._events.clear()
    return user


class TestRegistration:
    def test_defaults_to_active_buyer_with_zero_balance(self):
        user = User.register(username="alice")
        assert user.role == UserRole.BUYER.value
        assert user.status == UserStatus.ACTIVE.value
        assert user.balance == 0

    def test_registers_seller(self):
        user = User.register(username="bob", role=UserRole.SELLER.value)
        assert user.role == UserRole.SELLER.value
        assert not user.is_buyer

    def test_raises_registered_event(self):
        user = User.register(username="alice")
        assert len(user._events) == 1
        event = user._events[0]
        assert isinstance(event, UserRegistered)
        assert event.user_id == str(user.id)
        assert event.username == "alice"

    def test_username_is_required(self):
        with pytest.raises(ValidationError):
            User.register(username=None)

    def test_balance_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            User(username="alice", balance=-1)


class TestDeposit:
    def test_deposit_increases_balance(self):
        user = _make_buyer(balance=10)
        user.deposit(15)
        assert user.balance == 25

    def test_deposit_raises_event(self):
        user = _make_buyer(balance=10)
        user.deposit(5)
        event = user._events[0]
        assert isinstance(event, FundsDeposited)
        assert event.previous_balance == 10
        assert event.new_balance == 15

    @pytest.mark.parametrize("amount", [0, -5])
    def test_deposit_must_be_positive(self, amount):
        user = _make_buyer()
        with pytest.raises(ValidationError) as exc:
            user.deposit(amount)
        assert "Deposit amount must be positive" in str(exc.value)

    def test_sellers_cannot_deposit(self):
        seller = User.register(username="bob", role=UserRole.SELLER.value)
        with pytest.raises(ValidationError) as exc:
            seller.deposit(10)
        assert "Only buyers can deposit funds" in str(exc.value)


class TestResetDeposit:
    def test_reset_zeroes_balance(self):
        user = _make_buyer(balance=40)
        user.reset_deposit()
        assert user.balance == 0

    def test_reset_raises_event_with_previous_balance(self):
        user = _make_buyer(balance=40)
        user.reset_deposit()
        event = user._events[0]
        assert isinstance(event, DepositReset)
        assert event.previous_balance == 40


class TestDebit:
    def test_debit_reduces_balance(self):
        user = _make_buyer(balance=25)
        user.debit(20)
        assert user.balance == 5

    def test_debit_of_entire_balance(self):
        user = _make_buyer(balance=25)
        user.debit(25)
        assert user.balance == 0

    def test_debit_raises_event(self):
        user = _make_buyer(balance=25)
        user.debit(20)
        event = user._events[0]
        assert isinstance(event, BalanceDebited)
        assert event.amount == 20
        assert event.new_balance == 5

    def test_debit_refuses_to_overdraw(self):
        user = _make_buyer(balance=15)
        with pytest.raises(InsufficientFunds):
            user.debit(20)
        assert user.balance == 15
        assert user._events == []


class TestClose:
    def test_close_marks_account_closed(self):
        user = _make_buyer()
        user.close()
        assert user.status == UserStatus.CLOSED.value
        assert isinstance(user._events[0], UserClosed)

    def test_closed_account_cannot_deposit(self):
        user = _make_buyer()
        user.close()
        with pytest.raises(ValidationError) as exc:
            user.deposit(10)
        assert "Account is closed" in str(exc.value)

    def test_cannot_close_twice(self):
        user = _make_buyer()
        user.close()
        with pytest.raises(ValidationError):
            user.close()


class TestUpdate:
    def test_update_username_and_role(self):
        user = _make_buyer()
        user.update(username="alice2", role=UserRole.SELLER.value)
        assert user.username == "alice2"
        assert user.role == UserRole.SELLER.value

    def test_partial_update_keeps_other_fields(self):
        user = _make_buyer()
        user.update(username="alice2")
        assert user.role == UserRole.BUYER.value
