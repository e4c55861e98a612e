from __future__ import annotations

import argparse
import json

from rich import print

from iotmon_functions.client import DeviceApiClient
from iotmon_functions.config import load_client_config


def main() -> None:
    parser = argparse.ArgumentParser(description="Show devices from the device state API")
    parser.add_argument("device_id", nargs="?", help="Show only this device")
    args = parser.parse_args()

    client = DeviceApiClient(load_client_config())

    if args.device_id:
        device = client.get_device(args.device_id)
        if device is None:
            print(f"[bold yellow]No device with ID {args.device_id}[/bold yellow]")
            return
        print(json.dumps(device, indent=2))
        return

    devices = client.list_devices()
    print(f"[bold]Registered devices ({len(devices)}):[/bold]")
    print(json.dumps(devices, indent=2))


if __name__ == "__main__":
    main()
