

class JLispError(Exception):
    """ Base class for all jlisp errors. Every subclass is catchable by `try`."""
    pass

class JLispReadError(JLispError):
    """ Raised when program text cannot be tokenized or parsed"""
    pass

class JLispSyntaxError(JLispError):
    """ Raised when a macro is used with the wrong shape during expansion"""

class JLispUnboundSymbol(JLispError):
    """ Raised when a symbol is used before it is bound (or is bound to nil)"""

class JLispNotAFunction(JLispError):
    """ Raised when the head of an evaluated list is not a function"""

class JLispArityError(JLispError):
    """ Raised when the number of arguments passed to a function is incorrect"""

class JLispTypeError(JLispError):
    """ Raised when the types of arguments passed to a function are incorrect"""

class JLispArithmeticError(JLispError):
    """ Raised on division by zero"""

class JLispNativeError(JLispError):
    """ Raised when a `native` host expression fails or returns an unusable value"""

class JLispThrow(JLispError):
    """ Raised by the `throw` macro; the message is the printed form of its argument"""
