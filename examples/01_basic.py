"""
Basic usage - Log in and print a ticket
"""
import asyncio
from steamauth import AuthConfig, AuthOrchestrator, load_transport, setup_logging


async def main():
    setup_logging()
    
    # Reads SteamKitAuthConfig.txt from the working directory
    config = AuthConfig.from_file().merged(app_id=730).validate()
    transport = load_transport(config.transport)
    
    outcome = await AuthOrchestrator(config, transport).run()
    
    if outcome.succeeded:
        print(f"Ticket={outcome.ticket.hex}")
    else:
        print(f"No ticket: {outcome.reason.value}")


if __name__ == "__main__":
    asyncio.run(main())
