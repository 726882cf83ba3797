"""
Sample fragments and helpers shared by the transcoder tests.
"""

from __future__ import annotations

from typing import Optional

from svgshield import TransformOptions, finalize_after_optimization, prepare_for_optimization


def identity_round_trip(fragment: str, options: Optional[TransformOptions] = None) -> str:
    """prepare → identity optimizer → finalize."""
    prepared = prepare_for_optimization(fragment, options)
    return finalize_after_optimization(prepared.prepared_fragment, prepared.was_foreign, options)


JSX_ICON = """<svg
      className='w-4 h-4 text-white/70'
      fill='none'
      stroke='currentColor'
      viewBox='0 0 24 24'
    >
      <path
        strokeLinecap='round'
        strokeLinejoin='round'
        strokeWidth={2}
        d='M19 9l-7 7-7-7'
      />
    </svg>"""

VUE_ICON = """<svg :width="size" :height="size" viewBox="0 0 24 24" @click="onClick">
  <path v-if="filled" :fill="color" d="M0 0h24v24H0z"/>
  <title>{{ label }}</title>
</svg>"""

SVELTE_ICON = """<svg width={size} height={size} class:active on:click={toggle} {...$$restProps}>
  <circle cx="12" cy="12" r={radius} bind:this={el} />
</svg>"""

ASTRO_ICON = """<svg client:only xmlns="http://www.w3.org/2000/svg" set:html={raw} class="icon"></svg>"""

PLAIN_ICON = """<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" viewBox="0 0 24 24">
  <style>.a { fill: red; }</style>
  <use xlink:href="#shape" class="a"/>
</svg>"""
