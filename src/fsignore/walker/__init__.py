"""Directory enumeration and content streaming used by the ignore walker"""

from .lister import DirectoryLister, Entry, LocalDirectoryLister, ReadHandle
from .reader import DirReader

__all__ = ['DirectoryLister', 'Entry', 'LocalDirectoryLister', 'ReadHandle', 'DirReader']
