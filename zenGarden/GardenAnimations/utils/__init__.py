# -- Animation Utilities -- #
