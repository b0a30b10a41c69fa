#!/usr/bin/env python3

"""
Stack Emulator

It is unnecessary to include the CPU call stack as part of system RAM, because
there is no specified location for it.  There is also no stack pointer (SP)
register exposed to the running program, so it is kept separate for speed.

The stack is a fixed array of return addresses with a pointer to the topmost
used entry.  The pointer is -1 when the stack is empty and can never leave the
range [-1, size - 1].  Calling too deep or returning with nothing on the stack
raises a StackError instead of wrapping around.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size):
        self.size = size
        self.items = [0] * size
        self.pointer = -1

    def push(self, item):
        if self.pointer >= self.size - 1:
            raise StackError("Stack overflow")

        self.pointer += 1
        self.items[self.pointer] = item

    def pop(self):
        if self.pointer < 0:
            raise StackError("Stack underflow")

        item = self.items[self.pointer]
        self.pointer -= 1
        return item

    def clear(self):
        self.items = [0] * self.size
        self.pointer = -1

    def get_items(self):
        # For debugging.  Bottom of the stack first.
        return self.items[:self.pointer + 1]
