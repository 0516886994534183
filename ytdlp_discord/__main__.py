import sys

from ytdlp_discord.adapters.discord.launcher import main

sys.exit(main())
