# -*- coding: utf-8; -*-

version = '0.3.0'
homepage = 'https://github.com/pegrow/pegrow'
