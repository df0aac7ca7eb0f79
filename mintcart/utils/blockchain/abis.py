PRODUCT_FACTORY_ABI = """[
  {
    "type": "function",
    "name": "create",
    "stateMutability": "nonpayable",
    "inputs": [
      {"name": "tokenUri", "type": "string"},
      {"name": "slug", "type": "string"},
      {"name": "owner", "type": "address"},
      {"name": "price", "type": "uint256"},
      {"name": "supply", "type": "uint256"}
    ],
    "outputs": [{"name": "product", "type": "address"}]
  },
  {
    "type": "event",
    "name": "ProductCreated",
    "anonymous": false,
    "inputs": [
      {"name": "product", "type": "address", "indexed": true},
      {"name": "owner", "type": "address", "indexed": true},
      {"name": "slug", "type": "string", "indexed": false}
    ]
  }
]"""
