from typing import NamedTuple


class ProductReceipt(NamedTuple):
    tx_hash: str
    block_number: int
    contract_address: str
