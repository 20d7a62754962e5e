from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import invoices, payments, receipts

app = FastAPI(title="Billing Engine API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(invoices.router)
app.include_router(payments.router)
app.include_router(receipts.router)


@app.get("/")
def root():
    return {"status": "ok"}
