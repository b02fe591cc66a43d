HASH_ALGORITHM_ALIASES = {
    "none": None,
    "raw": None,
    "xxhash64": "xxhash64",
    "xxh64": "xxhash64",
}

HASH_ALGORITHM_CHOICES = list(HASH_ALGORITHM_ALIASES.keys())

HASH_ALGORITHM_HELP_TEXT = (
    "What is cached for every block that has been read:\n"
    "  none, raw      : the block bytes themselves (default)\n"
    "  xxhash64, xxh64: an 8-byte xxHash64 digest of the block\n"
    "Example: %(prog)s -i ~/Downloads -b 1M -a xxhash64\n"
)

EPILOG_TEXT = """
Output:
  One block of paths per group of identical files, blank line between groups.

Examples:
  Group every file under Downloads
  %(prog)s -i ~/Downloads

  Two roots, skip a cache directory, only files larger than 4KB
  %(prog)s -i ~/Pictures -i /mnt/backup/Pictures -e ~/Pictures/.cache -s 4K

  Only JPEG files (full-match regular expression), at most two levels deep
  %(prog)s -i ~/Pictures -f '.*\\.(jpe?g|JPE?G)' -d 2 --duplicates-only

  Bigger blocks, cached as digests
  %(prog)s -i /srv/media -b 1M -a xxhash64
"""
