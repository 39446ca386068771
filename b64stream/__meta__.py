# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""Package metadata for b64stream."""


__appname__     = 'b64stream'
__version__     = '0.3.0'
__authors__     = ['B64Stream Team <b64stream@users.noreply.github.com>', ]
__developer__   = 'B64Stream Team'
__contact__     = 'b64stream@users.noreply.github.com'
__license__     = 'Apache License 2.0'
__website__     = 'https://github.com/b64stream/b64stream'
__copyright__   = 'B64Stream Team 2022'
__description__ = 'Streaming Base64 encoder/decoder filters (RFC 4648, RFC 2045).'
__keywords__    = 'base64 codec stream rfc4648 rfc2045 mime'
