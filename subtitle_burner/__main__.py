"""Package entry point for ``python -m subtitle_burner``.

Delegates to the CLI: ``python -m subtitle_burner render clip.mp4 --cues cues.json``.
"""

if __name__ == "__main__":
    from subtitle_burner.cli import main
    main()
