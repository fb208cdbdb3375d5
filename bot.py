import sys

from voice_thread_bot.app import main


if __name__ == "__main__":
    try:
        main()
    except ValueError as exc:
        print(f"Config error: {exc}", file=sys.stderr)
        print(
            "Fill DISCORD_TOKEN / VC_CATEGORY_ID / THREAD_CHANNEL_ID in .env.",
            file=sys.stderr,
        )
        raise SystemExit(2)
