#!/usr/bin/env python3
"""
Authorization Example - Permission checks for channel actions

A tiny role model: each role grants a permission bitfield, a member's
permissions are the union of their roles, and each action requires a set
of permissions. The Administrator role passes every check while still
listing only its literal bits.

Run with: python examples/authorization.py
"""

import logging
import os
import sys

# Add parent directory to path for development
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flagfield import PermissionsBitField, UnresolvableInputError
from flagfield.logging import setup_structured_logging


# Roles are shared between members, so they are frozen
ROLES = {
    'everyone': PermissionsBitField(PermissionsBitField.Default).freeze(),
    'moderator': PermissionsBitField(['ManageMessages', 'ModerateMembers', 'KickMembers']).freeze(),
    'stage': PermissionsBitField(PermissionsBitField.StageModerator).freeze(),
    'admin': PermissionsBitField('Administrator').freeze(),
}

ACTIONS = {
    'send message': ['ViewChannel', 'SendMessages'],
    'delete message': ['ViewChannel', 'ManageMessages'],
    'move speaker': PermissionsBitField.StageModerator,
    'ban member': 'BanMembers',
}


def member_permissions(role_names):
    """Union of the permissions of every role."""
    return PermissionsBitField([ROLES[name] for name in role_names])


def main():
    setup_structured_logging(logging.INFO, 'authorization')
    logger = logging.getLogger('authorization')

    members = {
        'alice': ['everyone'],
        'bob': ['everyone', 'moderator'],
        'carol': ['everyone', 'stage'],
        'dave': ['everyone', 'admin'],
    }

    for member, role_names in members.items():
        perms = member_permissions(role_names)
        print(f"\n{member} ({', '.join(role_names)}): {perms.to_json()}")
        for action, required in ACTIONS.items():
            missing = perms.missing(required)
            verdict = 'allow' if not missing else f"deny (missing {', '.join(missing)})"
            print(f"  {action:<15} {verdict}")

    admin = member_permissions(['admin'])
    print(f"\nAdministrator has SendMessages: {admin.has('SendMessages')}")
    print(f"Administrator literal bits:     {admin.to_array()}")

    try:
        member_permissions(['everyone']).has('FlyAirplanes')
    except UnresolvableInputError as exc:
        logger.info("Rejected unknown permission %r", exc.value)


if __name__ == '__main__':
    main()
