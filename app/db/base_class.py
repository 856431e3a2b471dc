from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
    @declared_attr.directive
    def __tablename__(cls) -> str:  # type: ignore
        # Invoice -> invoices, Customer -> customers
        return f"{cls.__name__.lower()}s"
