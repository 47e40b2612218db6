"""artix-chroot: enter a chroot with the essential kernel filesystems mounted.

Lifecycle of one run:
- Check we are root and the target directory exists (nothing touched yet)
- Bind mount /proc, /sys, /dev into the target, in that order
- Link or copy the host resolv.conf into the target (unless skipped)
- Run the command through chroot(8) with the terminal passed through
- Unmount dev, sys, proc on every way out, warning on failures
"""

__all__ = []
