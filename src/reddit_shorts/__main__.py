from reddit_shorts.cli import main

main()
