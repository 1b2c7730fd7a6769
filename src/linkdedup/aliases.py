from linkdedup.core.models import Action

ACTION_ALIASES = {
    "list": Action.LIST,
    "delete": Action.DELETE,
    "hardlink": Action.HARDLINK,
}

ACTION_CHOICES = list(ACTION_ALIASES.keys())

ACTION_HELP_TEXT = (
    "What to do with duplicates (default: list):\n"
    "  list       : Only report duplicate groups, change nothing\n"
    "  delete     : Delete every duplicate, keep the oldest file of each group\n"
    "  hardlink   : Replace every duplicate with a hardlink to the oldest file\n"
)

EPILOG_TEXT = """
Examples:
  Basic usage - list duplicates in Downloads folder
  %(prog)s ~/Downloads

  Delete duplicates, keeping the oldest copy of each file
  %(prog)s ~/Downloads delete

  Same as above but send duplicates to the system trash
  %(prog)s ~/Downloads delete --trash

  Replace duplicates of files between 1MB and 2GB with hardlinks
  %(prog)s ~/Photos --hardlink -m 1M -M 2G

  Skip a directory and save the report to a file (for scripts)
  %(prog)s ~/Photos -e ~/Photos/cache > ~/report.txt
"""
