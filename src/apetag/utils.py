# -*- coding: utf-8 -*-
# vim: set fileencoding=utf-8 :

__all__ = (
    'humanbytes',
)

KB = float(1024)
MB = float(KB ** 2) # 1,048,576
GB = float(KB ** 3) # 1,073,741,824

def humanbytes(B):
    'Return the given bytes as a human friendly KB, MB or GB string'
    B = int(B)

    if B < KB:
        return '{0} {1}'.format(B, 'Byte' if B == 1 else 'Bytes')
    elif B < MB:
        return '{0:.2f}KB'.format(B / KB)
    elif B < GB:
        return '{0:.2f}MB'.format(B / MB)
    else:
        return '{0:.2f}GB'.format(B / GB)

# vim: ft=python ts=8 sw=4 sts=4 ai et fdm=marker
