from enum import Flag


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format'''
    NONE    = 0
    SLOT    = 1 << 0  # text must fit the slot up to the next field
    SIZE    = 1 << 1  # the copies of a mirrored field must agree
    INHERIT = 1 << 2
