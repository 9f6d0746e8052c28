from dataclasses import dataclass
from decimal import Decimal

import pathcopy
from pathcopy import ArrayModificationMode, deep_copy


@dataclass(frozen=True)
class Product:
    id: str
    price: Decimal


@dataclass(frozen=True)
class Order:
    id: str
    products: list[Product]


def main() -> None:
    pathcopy.PATHCOPY_CONFIG.log_level = "DEBUG"
    pathcopy.configure_logging()
    logger = pathcopy.get_logger()

    orders = [
        Order("oid-1", []),
        Order("oid-2", [Product("pid-1", Decimal("10.10")), Product("pid-2", Decimal("20"))]),
    ]

    orders = deep_copy(orders, "1/products/0/id", "ZZZ")
    orders = deep_copy(
        orders, "0/products/0", Product("pid-3", Decimal("3.30")), ArrayModificationMode.INSERT_APPEND
    )
    orders = deep_copy(orders, "1/products/1", None, ArrayModificationMode.REMOVE)
    logger.warning("result: %s", orders)

    try:
        deep_copy(orders, "1/products/0/price", "not a number")
    except pathcopy.SchemaViolation as exc:
        logger.warning("rejected: %s", exc)


if __name__ == "__main__":
    main()
