"""
Dry run - Rehearse a two-factor login against the in-memory transport
"""
import asyncio
from steamauth import AuthConfig, AuthOrchestrator, EResult, MemoryTransport, setup_logging
from steamauth.core.api import LoggedOn, MachineAuthUpdate, Connected


async def main():
    setup_logging()
    
    config = AuthConfig(username="demo", password="demo", app_id=730, reconnect_delay=0.5)
    
    # The remote side asks for an authenticator code, then sends a sentry chunk
    transport = MemoryTransport(
        logon_results=[
            LoggedOn(EResult.AccountLoginDeniedNeedTwoFactor),
            LoggedOn(EResult.OK),
        ],
        ticket=bytes(range(16)),
        on_connect=lambda n: [MachineAuthUpdate(offset=0, data=b'demo sentry', job_id=n), Connected()],
    )
    
    orchestrator = AuthOrchestrator(config, transport, reader=lambda prompt: "00000")
    outcome = await orchestrator.run()
    
    print("States:", " -> ".join(state.value for state in orchestrator.history))
    print(f"Ticket={outcome.ticket.hex}")
    print(f"Sentry file: {config.sentry_path}")


if __name__ == "__main__":
    asyncio.run(main())
