# Area: Chain
"""
rps_client._chain.web3_gateway — web3.py contract gateway
=========================================================

ContractGateway backed by an AsyncWeb3 HTTP provider and a local
private key. Transactions are built, signed locally, sent raw and
awaited until their receipt arrives.

A revert during gas estimation or a failed receipt becomes
SubmissionRejectedError carrying the node's reason text; for a failed
receipt the reason is recovered by replaying the call. Once a
transaction is broadcast, any failure to read its receipt becomes
SubmissionUnconfirmedError, since it may still be mined.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Sequence

from eth_account import Account
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3Exception
from web3.logs import DISCARD

from ..errors import SubmissionRejectedError, SubmissionUnconfirmedError
from .abi import RPS_ABI
from .gateway import ContractGateway, RawGameInfo

logger = logging.getLogger("rps_client.chain")

DEFAULT_RECEIPT_TIMEOUT = 120


def rejection_reason(error: Exception) -> str:
    """Extract the human-readable reason from a web3 error."""
    message = getattr(error, "message", None)
    if message:
        return str(message)
    if error.args:
        first = error.args[0]
        if isinstance(first, dict) and first.get("message"):
            return str(first["message"])
        return str(first)
    return error.__class__.__name__


class Web3ContractGateway(ContractGateway):
    """
    Contract gateway talking JSON-RPC through web3.py.

    Args:
        rpc_url: HTTP JSON-RPC endpoint
        contract_address: Deployed RPS contract
        private_key: Hex private key of the signing account
        chain_id: Chain id for signing; fetched from the node when None
        receipt_timeout: Seconds to wait for a transaction receipt
        w3: Pre-built AsyncWeb3 instance (tests)
    """

    def __init__(
        self,
        rpc_url: str,
        contract_address: str,
        private_key: str,
        chain_id: Optional[int] = None,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
        w3: Optional[AsyncWeb3] = None,
    ):
        self.w3 = w3 or AsyncWeb3(AsyncHTTPProvider(rpc_url))
        self.contract = self.w3.eth.contract(
            address=Web3.to_checksum_address(contract_address), abi=RPS_ABI
        )
        self._signer = Account.from_key(private_key)
        self._chain_id = chain_id
        self.receipt_timeout = receipt_timeout

    @property
    def account(self) -> str:
        return self._signer.address

    # ── State-changing calls ───────────────────────────────────

    async def create_game(self, value_wei: int) -> Optional[int]:
        receipt = await self._transact(
            "create", lambda: self.contract.functions.createGame(), value_wei
        )
        events = self.contract.events.NewGame().process_receipt(receipt, errors=DISCARD)
        if not events:
            logger.warning("createGame receipt carried no NewGame event")
            return None
        return int(events[0]["args"]["gameId"])

    async def join_game(self, game_id: int, value_wei: int) -> None:
        await self._transact(
            "join", lambda: self.contract.functions.joinGame(game_id), value_wei, game_id
        )

    async def commit_move(self, game_id: int, commitment_hash: bytes) -> None:
        await self._transact(
            "commit",
            lambda: self.contract.functions.commitMove(game_id, bytes(commitment_hash)),
            game_id=game_id,
        )

    async def reveal_move(self, game_id: int, move: int, salt: str) -> None:
        await self._transact(
            "reveal",
            lambda: self.contract.functions.revealMove(game_id, int(move), salt),
            game_id=game_id,
        )

    # ── Read calls ─────────────────────────────────────────────

    async def get_open_games(self) -> Sequence[int]:
        ids = await self.contract.functions.getOpenGames().call()
        return [int(i) for i in ids]

    async def get_game_info(self, game_id: int) -> RawGameInfo:
        return tuple(await self.contract.functions.getGameInfo(game_id).call())

    async def game_counter(self) -> int:
        return int(await self.contract.functions.gameCounter().call())

    # ── Internals ──────────────────────────────────────────────

    async def _get_chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = await self.w3.eth.chain_id
        return self._chain_id

    async def _transact(
        self,
        action: str,
        build_call: Callable[[], Any],
        value_wei: int = 0,
        game_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Build, sign, send and confirm one transaction.

        Raises:
            SubmissionRejectedError: If the node refuses the transaction or
                it is mined with a failed status
            SubmissionUnconfirmedError: If anything goes wrong after the
                transaction was broadcast, before a receipt is read
        """
        try:
            params = {
                "from": self.account,
                "value": value_wei,
                "nonce": await self.w3.eth.get_transaction_count(self.account, "pending"),
                "chainId": await self._get_chain_id(),
            }
            tx = await build_call().build_transaction(params)
            signed = self._signer.sign_transaction(tx)
            tx_hash = await self.w3.eth.send_raw_transaction(signed.raw_transaction)
        except ContractLogicError as e:
            raise SubmissionRejectedError(action, rejection_reason(e), game_id) from e
        except (Web3Exception, ValueError) as e:
            raise SubmissionRejectedError(action, rejection_reason(e), game_id) from e
        logger.info("%s submitted for game %s: %s", action, game_id, tx_hash.hex())

        # Broadcast: from here on the outcome is unknown until a receipt is read
        try:
            receipt = await self.w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self.receipt_timeout
            )
        except TimeExhausted as e:
            raise SubmissionUnconfirmedError(action, tx_hash.hex(), game_id) from e
        except Exception as e:
            logger.warning(f"{action} for game {game_id}: receipt lookup failed: {e}")
            raise SubmissionUnconfirmedError(action, tx_hash.hex(), game_id) from e

        if receipt["status"] != 1:
            reason = await self._revert_reason(tx, receipt)
            raise SubmissionRejectedError(action, reason, game_id)
        logger.info("%s confirmed for game %s in block %s", action, game_id, receipt["blockNumber"])
        return receipt

    async def _revert_reason(self, tx: Dict[str, Any], receipt: Dict[str, Any]) -> str:
        """Replay a failed transaction with eth_call to recover its revert reason."""
        replay = {key: tx[key] for key in ("from", "to", "data", "value") if key in tx}
        try:
            await self.w3.eth.call(replay, receipt["blockNumber"])
        except ContractLogicError as e:
            return rejection_reason(e)
        except (Web3Exception, ValueError) as e:
            logger.debug(f"Revert reason replay failed: {e}")
        return "transaction reverted"
