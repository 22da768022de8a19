from dupsrm.core.models import HashAlgorithmName

HASH_ALGORITHM_ALIASES = {member.value: member for member in HashAlgorithmName}

HASH_ALGORITHM_CHOICES = list(HASH_ALGORITHM_ALIASES.keys())

HASH_ALGORITHM_HELP_TEXT = (
    "Hash algorithm used to compare file contents (case-insensitive):\n"
    + "".join(
        f"  {member.value:<12}: {member.description}\n" for member in HashAlgorithmName
    )
    + "Files are matched on digest equality only. Legacy digests (SHA1, MD5) and\n"
    "checksums (XXH64, XXH3-128) can collide, so unrelated files may be removed.\n"
    "Default: %(default)s"
)

EPILOG_TEXT = """
Examples:
  Show which files in ~/backup already exist somewhere under ~/photos
  %(prog)s ~/backup ~/photos --dry-run

  Remove them for real
  %(prog)s ~/backup ~/photos

  Only consider JPEG files of the reference directory
  %(prog)s ~/backup ~/photos -r '\\.jpe?g$'

  Use a faster digest (see --hash-algorithm for the collision trade-off)
  %(prog)s ~/backup ~/photos -a BLAKE2B-256

Exit codes:
  0  finished, nothing went wrong (also when no duplicates were found)
  1  finished, but some files could not be removed or read
  2  invalid arguments
  3  root directory could not be fully read, nothing was removed
"""
