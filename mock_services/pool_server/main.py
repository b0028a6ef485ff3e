from fastapi import FastAPI, Header, HTTPException
from pydantic import BaseModel, Field
import os


class DepositBody(BaseModel):
    amount: int = Field(..., gt=0)
    sender: str


class TransferBody(BaseModel):
    amount: int = Field(..., gt=0)
    recipient: str


def create_app(capability_token: str, seed_funds: int = 0) -> FastAPI:
    app = FastAPI(title="Mock Pool Custody", version="1.0.0")
    state = {"total_funds": seed_funds, "disbursed": {}}

    @app.get("/health")
    def health(): return {"status": "ok"}

    @app.get("/pool/balance")
    def balance(): return {"total_funds": state["total_funds"]}

    @app.post("/pool/deposit")
    def deposit(body: DepositBody):
        state["total_funds"] += body.amount
        return {"total_funds": state["total_funds"]}

    @app.post("/pool/transfer")
    def transfer(body: TransferBody, authorization: str = Header(default="")):
        if authorization != f"Bearer {capability_token}":
            raise HTTPException(status_code=403, detail="invalid custody capability")
        if body.amount > state["total_funds"]:
            raise HTTPException(status_code=409, detail="insufficient pool funds")
        state["total_funds"] -= body.amount
        state["disbursed"][body.recipient] = state["disbursed"].get(body.recipient, 0) + body.amount
        return {"total_funds": state["total_funds"], "recipient": body.recipient, "amount": body.amount}

    return app


app = create_app(
    capability_token=os.getenv("POOL_CAPABILITY_TOKEN", "dev-capability"),
    seed_funds=int(os.getenv("POOL_SEED_FUNDS", "0")),
)
