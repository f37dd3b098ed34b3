"""
Solana ledger connection backed by solana-py's AsyncClient.

Translates RPC and transport failures into domain exceptions.
"""

from typing import List, Optional

import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solana.rpc.core import RPCException
from solana.rpc.types import TxOpts
from solders.hash import Hash  # type: ignore

from monnayeur.domain.exceptions import (
    AccountAlreadyExistsError,
    LedgerConnectionError,
    SubmissionError,
)
from monnayeur.domain.services.i_ledger_connection import ILedgerConnection

ALREADY_IN_USE_MARKER = "already in use"

_TRANSPORT_ERRORS = (SolanaRpcException, httpx.HTTPError, OSError)


def _error_logs(error: RPCException) -> List[str]:
    """Program logs attached to a preflight failure, if any."""
    logs: List[str] = []
    for arg in error.args:
        data = getattr(arg, "data", None)
        if data is not None and getattr(data, "logs", None):
            logs.extend(str(line) for line in data.logs)
    return logs


class SolanaLedgerConnection(ILedgerConnection):
    """
    Ledger connection over Solana JSON-RPC.

    Timeouts are enforced by the underlying HTTP client; there is no
    retry at this level.
    """

    def __init__(
        self,
        rpc_url: str,
        commitment: str = "confirmed",
        timeout: float = 10.0,
        skip_preflight: bool = False,
        client: Optional[AsyncClient] = None,
    ):
        """
        Initialize Solana ledger connection.

        Args:
            rpc_url: Solana RPC endpoint URL
            commitment: Commitment used for queries and preflight
            timeout: HTTP timeout in seconds
            skip_preflight: Skip simulation before submission
            client: Optional pre-built AsyncClient (tests)
        """
        self.rpc_url = rpc_url
        self.commitment = Commitment(commitment)
        self.skip_preflight = skip_preflight
        self.client = client or AsyncClient(
            rpc_url,
            commitment=self.commitment,
            timeout=timeout,
        )

    async def get_minimum_balance_for_rent_exemption(self, size: int) -> int:
        """Get rent-exempt minimum balance in lamports."""
        try:
            response = await self.client.get_minimum_balance_for_rent_exemption(
                size, commitment=self.commitment
            )
        except (RPCException, *_TRANSPORT_ERRORS) as e:
            raise LedgerConnectionError(
                f"Rent exemption query failed: {e}",
                details={"method": "getMinimumBalanceForRentExemption", "size": size},
            ) from e

        return int(response.value)

    async def get_latest_blockhash(self) -> Hash:
        """Get the latest blockhash."""
        try:
            response = await self.client.get_latest_blockhash(
                commitment=self.commitment
            )
        except (RPCException, *_TRANSPORT_ERRORS) as e:
            raise LedgerConnectionError(
                f"Latest blockhash query failed: {e}",
                details={"method": "getLatestBlockhash"},
            ) from e

        return response.value.blockhash

    async def send_raw_transaction(self, payload: bytes) -> str:
        """
        Submit a signed transaction.

        Returns once the node accepted the transaction, not on finality.
        """
        opts = TxOpts(
            skip_preflight=self.skip_preflight,
            preflight_commitment=self.commitment,
        )

        try:
            response = await self.client.send_raw_transaction(payload, opts=opts)
        except RPCException as e:
            logs = _error_logs(e)
            text = " ".join([str(e), *logs]).lower()
            if ALREADY_IN_USE_MARKER in text:
                raise AccountAlreadyExistsError(
                    "Ledger reported account already in use",
                    details={"logs": logs},
                ) from e
            raise SubmissionError(
                f"Transaction rejected: {e}",
                details={"method": "sendTransaction", "logs": logs},
            ) from e
        except _TRANSPORT_ERRORS as e:
            raise LedgerConnectionError(
                f"Transaction submission failed: {e}",
                details={"method": "sendTransaction"},
            ) from e

        return str(response.value)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()

    async def __aenter__(self) -> "SolanaLedgerConnection":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
