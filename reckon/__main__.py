"""
Same as the `reckon` console script, for when it is not on the path:

    py -m reckon "1 + 2 * 3"
"""
from reckon.cmdline import main

main()
