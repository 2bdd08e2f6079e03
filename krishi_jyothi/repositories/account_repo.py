# krishi_jyothi/repositories/account_repo.py
from sqlalchemy import func
from sqlmodel import Session, select

from krishi_jyothi.models.account import Account
from krishi_jyothi.models.order import Order
from krishi_jyothi.models.product import Product


class AccountRepository:

    def get_by_id(self, session: Session, account_id: int) -> Account | None:
        return session.get(Account, account_id)

    def get_by_email(self, session: Session, email: str) -> Account | None:
        stmt = select(Account).where(Account.email == email)
        return session.exec(stmt).first()

    def create(self, session: Session, account: Account) -> Account:
        session.add(account)
        session.commit()
        session.refresh(account)
        return account

    def highest_identity_id(self, session: Session) -> int:
        """
        Largest identity id referenced anywhere in the database:
        registered accounts, product owners and order customers.
        """
        candidates = [
            session.exec(select(func.max(Account.id))).one(),
            session.exec(select(func.max(Product.farmer_id))).one(),
            session.exec(select(func.max(Order.identity_id))).one(),
        ]
        return max((c for c in candidates if c is not None), default=0)
