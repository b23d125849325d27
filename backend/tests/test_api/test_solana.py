"""
API tests for the mocked Solana endpoints
"""


class TestSolanaMock:

    def test_create_transaction(self, client):
        response = client.post("/api/solana/create-transaction", json={
            "from": "BuyerPubKey", "amount": 50, "reference": "TXN-001",
        })

        assert response.status_code == 200
        assert response.json() == {
            "serializedTransaction": "mock_serialized_transaction",
            "message": "Transaction created successfully",
        }

    def test_create_transaction_requires_amount(self, client):
        response = client.post("/api/solana/create-transaction", json={"from": "BuyerPubKey"})

        assert response.status_code == 400

    def test_usdc_balance(self, client):
        response = client.get("/api/solana/usdc-balance", params={"wallet": "BuyerPubKey"})

        assert response.json() == {"wallet": "BuyerPubKey", "balance": 1000}

    def test_server_key(self, client):
        body = client.get("/api/solana/server-key").json()

        assert len(body["publicKey"]) == 64
        assert body["endpoint"] == "https://api.devnet.solana.com"
