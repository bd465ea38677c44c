class SetupError(Exception):
    ''' A required input could not be loaded or resolved, the simulation cannot start.

    '''
