"""Account domain service."""

from pocketledger.domain.entities import AccountBalance, AccountsReport
from pocketledger.domain.ledger import compute_account_balances, total_balance
from pocketledger.storage.base import Storage


class AccountService:
    """Service for deriving account balances."""

    def __init__(self, storage: Storage):
        """Initialize account service.

        Args:
            storage: Storage instance
        """
        self.storage = storage

    def get_accounts(self, owner_id: str) -> AccountsReport:
        """Get balances of every account the owner has used, plus defaults.

        Args:
            owner_id: Owning user

        Returns:
            AccountsReport with per-account balances and their total
        """
        balances = compute_account_balances(self.storage.get_transactions(owner_id))
        return AccountsReport(
            accounts=tuple(
                AccountBalance(name=name, balance=balance)
                for name, balance in balances.items()
            ),
            total_balance=total_balance(balances),
        )

    def list_account_names(self, owner_id: str) -> list[str]:
        """List account names known for the owner, defaults first."""
        return list(compute_account_balances(self.storage.get_transactions(owner_id)))
