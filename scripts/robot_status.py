from __future__ import annotations

from rich import print

from iotmon_functions.client import DeviceApiClient
from iotmon_functions.config import load_client_config


def main() -> None:
    client = DeviceApiClient(load_client_config())
    states = client.get_robot_status()

    if not states:
        print("[bold yellow]No WaterBot has reported a status yet.[/bold yellow]")
        return

    print("[bold]Latest WaterBot status:[/bold]")
    for state in states:
        print(
            f"  [cyan]{state['botId']}[/cyan] {state.get('botName') or ''} "
            f"- {state.get('status')} @ {state.get('location')} ({state.get('locationCooSys')}) "
            f"[dim]{state.get('lastUpdated')}[/dim]"
        )


if __name__ == "__main__":
    main()
