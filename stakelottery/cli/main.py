import logging
import time

import typer
import yaml
from base58 import b58encode
from InquirerPy.utils import color_print
from pyfiglet import figlet_format
from yaspin import yaspin
from yaspin.spinners import Spinners

from stakelottery import config
from stakelottery.chain import Block
from stakelottery.constants import COIN, MAX_LOTTERY_WINNERS, NETWORKS
from stakelottery.errors import InvariantViolation
from stakelottery.lottery import (
    LotteryState,
    LotteryWinnersIndex,
    SuperblockSchedule,
    calculate_lottery_score,
)
from stakelottery.sporks import SporkManager
from stakelottery.utils import is_hash_str

# Initializing cli
app = typer.Typer()


class Send:
    @staticmethod
    def success(text: str):
        color_print([("green", text)])

    @staticmethod
    def fail(text: str):
        color_print([("red", text)])

    @staticmethod
    def primary(text: str):
        color_print([("#f6ca44", text)])

    @staticmethod
    def secondary(text: str):
        color_print([("#4470f6", text)])

    @staticmethod
    def spinner(text: str):
        return yaspin(Spinners.moon, text=text, color="cyan", timer=True)


def load_document(path: str) -> dict:
    # Json is a subset of yaml so both formats are accepted
    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping")

    return data


def format_state(state: LotteryState) -> str:
    winners = [
        {
            "rank": i + 1,
            "transaction_id": e.transaction_id,
            "payee": b58encode(e.payee_script).decode(),
        }
        for i, e in enumerate(state.entries)
    ]

    return yaml.dump(
        {"height": state.height, "winners": winners}, sort_keys=False
    )


@app.command()
def replay(
    chain_file: str = typer.Argument(..., help="Yaml or json dump of the chain"),
    network: str = typer.Option(None, help="Network parameters to use"),
    sporks: str = typer.Option(None, help="Yaml or json file with spork messages"),
    height: int = typer.Option(None, help="Show the winners at this height"),
    adjusted_time: int = typer.Option(
        None, help="Network time used for blocks that aren't connected yet"
    ),
    save: str = typer.Option(None, help="Save the lottery states under this name"),
):
    """Replays a chain and shows the lottery winners"""

    clock = time.time if adjusted_time is None else lambda: adjusted_time

    try:
        data = load_document(chain_file)
        spork_data = data if sporks is None else load_document(sporks)

        spork_manager = SporkManager.from_dict(spork_data, clock=clock)
    except (OSError, ValueError, TypeError, KeyError, yaml.YAMLError) as e:
        Send.fail(f"Could not load the input: {e}")
        raise typer.Exit(code=1)

    if network is None:
        network = data.get("network", config.network)

    if network not in NETWORKS:
        Send.fail(f"Unknown network {network}")
        raise typer.Exit(code=1)

    index = LotteryWinnersIndex(
        schedule=SuperblockSchedule.for_network(network),
        sporks=spork_manager,
        clock=clock,
    )

    with Send.spinner("Replaying chain") as sp:
        try:
            for b in data.get("blocks", []):
                block = Block.from_dict(b)

                tx = block.lottery_transaction

                if tx is not None and not tx.is_well_formed():
                    raise ValueError("malformed coin mint transaction")

                index.connect_block(block)

        except InvariantViolation as e:
            sp.fail("✘")
            Send.fail(f"Chain is inconsistent: {e}")
            raise typer.Exit(code=2)

        except (KeyError, TypeError, ValueError, IndexError) as e:
            sp.fail("✘")
            Send.fail(f"Invalid block at height {index.height + 1}: {e!r}")
            raise typer.Exit(code=1)

        sp.write(f"- Connected {len(index.chain)} blocks")
        sp.ok("✔")

    if save is not None:
        index.save(save)
        Send.secondary(f"Saved lottery states as {save}")

    if height is None:
        state = index.tip_state
    else:
        state = index.get_state(height)

    if state is None:
        Send.fail(f"No block at height {height}")
        raise typer.Exit(code=1)

    Send.success(f"\n{format_state(state)}")


@app.command()
def score(transaction_id: str, seed: str):
    """Shows the lottery score of a coinstake for a cycle seed"""

    if not (is_hash_str(transaction_id) and is_hash_str(seed)):
        Send.fail("Both arguments must be 64 character hex hashes")
        raise typer.Exit(code=1)

    Send.primary(f"{calculate_lottery_score(transaction_id, seed):064x}")


@app.command()
def info(network: str = typer.Option(None, help="Network to describe")):
    if network is None:
        network = config.network

    if network not in NETWORKS:
        Send.fail(f"Unknown network {network}")
        raise typer.Exit(code=1)

    params = NETWORKS[network]

    Send.primary(
        figlet_format("Stake Lottery")
        + "Deterministic superblock lottery winners for proof of stake chains."
    )

    Send.secondary(
        f"\nNetwork: {network}\n"
        f"Lottery start block: {params['lottery_start_block']}\n"
        f"Lottery cycle: {params['lottery_cycle']} blocks\n"
        f"Winners per cycle: {MAX_LOTTERY_WINNERS}\n"
        f"Coin: {COIN} units"
    )


def main():
    config.apply_config(config.load_config())
    logging.basicConfig(level=config.log_level)
    app()


if __name__ == "__main__":
    main()
